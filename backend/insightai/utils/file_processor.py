"""
Image processing utilities for InsightAI application.
"""
import base64
import binascii
import logging

logger = logging.getLogger("insightai.utils.file_processor")


def decode_image_base64(image_base64: str) -> bytes:
    """
    Decode a base64 image sent by the client.

    Accepts either a bare base64 string or a data URL such as
    ``data:image/jpeg;base64,/9j/...``.

    Args:
        image_base64: Encoded image

    Returns:
        Raw image bytes

    Raises:
        ValueError: If the payload is empty or not valid base64
    """
    data = image_base64.strip()
    if data.startswith("data:"):
        _, _, data = data.partition(",")

    if not data:
        raise ValueError("Image payload is empty")

    try:
        image_bytes = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        logger.error(f"Image decoding failed: {str(e)}")
        raise ValueError(f"Invalid base64 image data: {str(e)}")

    if not image_bytes:
        raise ValueError("Image payload is empty")
    return image_bytes


def validate_file_size(file_size: int, max_size: int) -> bool:
    """
    Validate file size against maximum allowed size.

    Args:
        file_size: Size of the file in bytes
        max_size: Maximum allowed size in bytes

    Returns:
        True if file size is valid, False otherwise
    """
    return 0 < file_size <= max_size
