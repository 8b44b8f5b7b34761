"""S3 Bucket Provider: lifecycle of an S3 bucket and its tag, driven by a declarative host."""

__version__ = "0.1.0"
