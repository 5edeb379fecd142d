"""HTTP constants for the fetch layer.

Centralizes all HTTP-related constants to avoid duplication across modules.
"""

# HTTP Status Code Ranges
HTTP_STATUS_OK_MIN = 200
HTTP_STATUS_OK_MAX = 300
HTTP_STATUS_NOT_MODIFIED = 304

# Request headers
HEADER_USER_AGENT = "User-Agent"
HEADER_IF_NONE_MATCH = "If-None-Match"
HEADER_ACCEPT_ENCODING = "Accept-Encoding"

# Response headers
HEADER_ETAG = "ETag"

# Advertised when compression is enabled; httpx decodes both transparently
ACCEPT_ENCODING_COMPRESSED = "gzip,deflate"
ACCEPT_ENCODING_IDENTITY = "identity"

# Response Size Limits
DEFAULT_MAX_RESPONSE_SIZE_BYTES = 10 * 1024 * 1024  # 10 MB

# Chunk size for streaming reads
DEFAULT_CHUNK_SIZE = 8192

DEFAULT_TIMEOUT_SECONDS = 30.0
