"""Setup (provisioning) helpers.

Create, fill and empty directory buckets around the example operations.
"""
