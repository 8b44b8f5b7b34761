"""Constants for the S3 Bucket Provider."""

# Resource type
RESOURCE_TYPE_SUFFIX = "_bucket"
DEFAULT_PROVIDER_TYPE_NAME = "s3"

# Tagging
TAG_KEY = "tfkey"

# RFC 850 layout, e.g. "Monday, 02-Jan-06 15:04:05 UTC"
TIMESTAMP_FORMAT = "%A, %d-%b-%y %H:%M:%S %Z"

# Remote error codes meaning the bucket is gone
MISSING_BUCKET_ERROR_CODES = {"404", "NoSuchBucket", "NotFound"}

# Lifecycle operations
OP_CREATE = "create"
OP_READ = "read"
OP_UPDATE = "update"
OP_DELETE = "delete"

# Kubernetes host adapter
API_GROUP = "s3.bucket-provider.dev"
API_VERSION = "v1alpha1"
API_GROUP_VERSION = f"{API_GROUP}/{API_VERSION}"
KIND_BUCKET = "Bucket"
CONTROLLER_NAME = "s3-bucket-provider"

# Condition Types
COND_READY = "Ready"

# Event Reasons
EVENT_REASON_BUCKET_CREATED = "BucketCreated"
EVENT_REASON_BUCKET_UPDATED = "BucketUpdated"
EVENT_REASON_BUCKET_DELETED = "BucketDeleted"
EVENT_REASON_BUCKET_MISSING = "BucketMissing"
EVENT_REASON_OPERATION_FAILED = "OperationFailed"
