"""
Encryption settings.

- Input decryption: Elastic Transcoder input Encryption -> MediaConvert
  decryptionSettings.
- Playlist protection: HLS content protection -> static-key output group
  encryption. PlayReady DRM has no static-key equivalent.
"""

from typing import TYPE_CHECKING, Any, Dict, Optional

from etsconvert.source.tracking import path_of

if TYPE_CHECKING:
    from etsconvert.reporting.models import MessageLog

DECRYPTION_MODE_MAP: Dict[str, str] = {
    "aes-cbc-pkcs7": "AES_CBC",
    "aes-ctr": "AES_CTR",
    "aes-gcm": "AES_GCM",
}


def decryption_settings(encryption: Any, log: "MessageLog") -> Optional[Dict[str, Any]]:
    """Convert Elastic Transcoder input encryption to MediaConvert decryption settings."""
    if not encryption:
        return None

    source_mode = encryption.get("mode")
    mode = DECRYPTION_MODE_MAP.get(source_mode)

    if mode is None:
        log.warn(
            path_of(encryption, "mode"),
            f"MediaConvert does not support input encryption mode {source_mode}",
        )
        mode = source_mode

    log.info(
        path_of(encryption),
        "If the region of your input decryption KMS key is different from the region you use "
        "MediaConvert, the region must be specified in input decryption settings.",
    )

    return {
        "decryptionMode": mode,
        "encryptedDecryptionKey": encryption.get("key"),
        "initializationVector": encryption.get("initializationVector"),
    }


def hls_encryption(protection: Any) -> Optional[Dict[str, Any]]:
    """Convert HLS content protection to MediaConvert static-key encryption."""
    if not protection:
        return None

    return {
        "type": "STATIC_KEY",
        "encryptionMethod": "AES128",
        "constantInitializationVector": protection.get("initializationVector"),
        "staticKeyProvider": {
            "staticKeyValue": protection.get("key"),
            "url": protection.get("licenseAcquisitionUrl"),
        },
    }


def playlist_encryption(playlist: Any, log: "MessageLog") -> Optional[Dict[str, Any]]:
    """Output group encryption for a playlist, if it declares protection."""
    if playlist.get("playReadyDrm"):
        log.warn(
            path_of(playlist, "playReadyDrm"),
            "The converter does not convert PlayReady DRM settings. MediaConvert DRM for "
            "Smooth and DASH outputs requires a SPEKE key provider.",
        )

    return hls_encryption(playlist.get("hlsContentProtection"))
