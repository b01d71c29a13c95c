"""
Request pipeline: request context and timing, authentication,
authorization and rate limiting.
"""
