"""
Job conversion: Elastic Transcoder job -> MediaConvert job or job template.

Traversal order is fixed and determines message order:
1. Document level settings (role)
2. Inputs, in source order
3. Output groups: playlists, unreferenced outputs, thumbnails

CRITICAL RULES:
- Templates carry name/description/category, never a role, input file
  URIs or user metadata.
- Jobs carry a role and user metadata, never template fields.
- Empty values are removed from the whole document before it is returned.
  User metadata is added after that pass and is copied verbatim.
"""

import logging
from typing import Any, Dict, List, Optional

from etsconvert.deliver.captions import input_caption_selectors
from etsconvert.deliver.cleanup import remove_empty
from etsconvert.deliver.encryption import decryption_settings
from etsconvert.deliver.output_groups import OutputGroupBuilder
from etsconvert.deliver.timespan import input_clippings
from etsconvert.jobs.context import ConversionContext
from etsconvert.jobs.results import ConversionResult
from etsconvert.jobs.settings import ConversionSettings, DEFAULT_CONVERSION_SETTINGS
from etsconvert.source.loader import LoadedJob
from etsconvert.source.tracking import unwrap

logger = logging.getLogger(__name__)

DEFAULT_ROLE_ARN = "arn:aws:iam::ACCOUNT_ID:role/MediaConvert_Default_Role"

AUDIO_SELECTORS = {"Audio Selector 1": {"defaultSelection": "DEFAULT"}}


# ============================================================================
# INPUTS
# ============================================================================

def has_output_audio(ctx: ConversionContext) -> bool:
    """Whether the preset of any job output has audio settings."""
    for output in ctx.job.get("outputs") or []:
        preset = ctx.preset_for(output)
        if preset and preset.get("audio"):
            return True
    return False


def job_input(job_input_: Any, ctx: ConversionContext) -> Dict[str, Any]:
    """Convert an Elastic Transcoder job input to a MediaConvert input."""
    logger.debug(f"Converting input {job_input_.get('key')}")

    file_input = None
    if not ctx.settings.is_template:
        file_input = f"s3://{ctx.pipeline.get('inputBucket')}/{job_input_.get('key')}"

    return {
        "fileInput": file_input,
        "audioSelectors": dict(AUDIO_SELECTORS) if has_output_audio(ctx) else None,
        "captionSelectors": input_caption_selectors(
            job_input_.get("inputCaptions"),
            ctx.job.get("outputs"),
            ctx,
        ),
        "decryptionSettings": decryption_settings(job_input_.get("encryption"), ctx.log),
        "inputClippings": input_clippings(job_input_.get("timeSpan"), ctx.log),
    }


# ============================================================================
# DOCUMENT
# ============================================================================

def job_role(ctx: ConversionContext) -> Optional[str]:
    """
    IAM role of a MediaConvert job.

    Templates have no role. A job without a role is invalid: the
    insert-defaults setting decides between a placeholder ARN (WARN)
    and no role at all (ERROR).
    """
    if ctx.settings.is_template:
        return None

    if ctx.settings.role_arn:
        return ctx.settings.role_arn

    if ctx.settings.insert_defaults:
        ctx.log.warn(
            ["role"],
            f"No IAM role specified. The converter inserted a placeholder role {DEFAULT_ROLE_ARN}. "
            "Replace it with a role MediaConvert can assume.",
        )
        return DEFAULT_ROLE_ARN

    ctx.log.error(["role"], "No IAM role specified. A MediaConvert job requires an IAM role.")
    return None


def build_job_document(ctx: ConversionContext) -> Dict[str, Any]:
    """Assemble the MediaConvert job (or job template) document."""
    settings = ctx.settings
    job = ctx.job

    document: Dict[str, Any] = {
        "name": settings.template_name,
        "description": settings.template_description if settings.is_template else None,
        "category": settings.template_category if settings.is_template else None,
        "role": job_role(ctx),
    }

    inputs = [job_input(i, ctx) for i in job.get("inputs") or []]
    first_selectors = inputs[0].get("captionSelectors") if inputs else None

    document["settings"] = {
        "inputs": inputs,
        "outputGroups": OutputGroupBuilder(ctx, first_selectors).build(),
    }

    document = remove_empty(document)

    user_metadata = job.get("userMetadata")
    if user_metadata and not settings.is_template:
        document["userMetadata"] = unwrap(user_metadata)

    return document


def convert_job(
    loaded: LoadedJob,
    settings: ConversionSettings = DEFAULT_CONVERSION_SETTINGS,
) -> ConversionResult:
    """
    Convert a loaded Elastic Transcoder job.

    Args:
        loaded: Job with its pipeline and resolved preset table
        settings: Conversion settings

    Returns:
        ConversionResult with the camelCase document and all messages
    """
    ctx = ConversionContext.for_job(loaded, settings)
    logger.info(f"Converting job {loaded.job.get('id')} (template={settings.is_template})")

    document = build_job_document(ctx)

    logger.debug(f"Job conversion finished with {len(ctx.log)} message(s)")
    return ConversionResult(
        document=document,
        messages=ctx.log.messages,
        camel_case=settings.camel_case_output,
    )
