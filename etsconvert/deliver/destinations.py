"""
Output group destinations.

Wire format, reproduced byte for byte:

    s3://<bucket>/<prefix><key>

The job's output key prefix loses one leading "/" and is otherwise used
verbatim, including a trailing "/" or its absence.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from etsconvert.jobs.context import ConversionContext


def build_destination(bucket: Optional[str], prefix: Optional[str] = "", key: Optional[str] = None) -> str:
    prefix = prefix or ""
    if prefix.startswith("/"):
        prefix = prefix[1:]
    return f"s3://{bucket}/{prefix}{key or ''}"


def output_bucket(ctx: "ConversionContext", thumbnails: bool = False) -> Optional[str]:
    """
    Bucket for outputs or thumbnails.

    Pipelines either name one output bucket, or separate content and
    thumbnail configs.
    """
    pipeline = ctx.pipeline
    content = pipeline.get("outputBucket") or (pipeline.get("contentConfig") or {}).get("bucket")

    if thumbnails:
        return (pipeline.get("thumbnailConfig") or {}).get("bucket") or content
    return content


def make_destination(ctx: "ConversionContext", key: Optional[str] = None, thumbnails: bool = False) -> str:
    """Destination URI for an output group of the current job."""
    return build_destination(output_bucket(ctx, thumbnails), ctx.output_key_prefix, key)
