"""AWS services constants."""

# S3 status codes worth another attempt (0 means no status was delivered)
S3_RETRYABLE_STATUS_CODES = frozenset({
    0,
    400,
    401,
    403,
    404,
    409,
    411,
    412,
    416,
    500,
    503,
})

# S3 status codes that carry a Location to chase
S3_REDIRECT_STATUS_CODES = frozenset({
    300,
    301,
    303,
    304,
    307,
})

# HTTP methods an Item knows how to re-issue
S3_SUPPORTED_METHODS = ("GET", "PUT", "DELETE")

# Header used for canned ACLs on PUT
S3_ACL_HEADER = "x-amz-acl"

# Bucket names eligible for virtual-hosted-style addressing
S3_DNS_BUCKET_MIN_LENGTH = 3
S3_DNS_BUCKET_MAX_LENGTH = 63
S3_DNS_BUCKET_LABEL_PATTERN = r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?$"

# Canned ACL that needs no x-amz-acl header
S3_PRIVATE_ACL = "private"
