"""
NGO Site Backend - Middleware Package
=====================================

Middleware Chain:
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

    - Request ID assigns the correlation id used by every log line and
      error body of the request.
    - Access Log records method, path, status and duration once the response
      is ready.
"""
