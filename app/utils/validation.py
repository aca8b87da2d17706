from typing import Any, Dict, List

from app.core.models import ComplianceRequest, ImageRef


class ValidationError(ValueError):
    pass


CONTENT_REQUIRED = "Content is required and must be a non-empty string."


def validate_request(payload: Any) -> ComplianceRequest:
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object.")

    content = payload.get("content")
    if not isinstance(content, str) or not content.strip():
        raise ValidationError(CONTENT_REQUIRED)

    title = _optional_text(payload, "title")
    meta_description = _optional_text(payload, "metaDescription")
    return ComplianceRequest(
        content=content,
        title=title,
        meta_description=meta_description,
        images=_parse_images(payload.get("images")),
    )


def _optional_text(payload: Dict[str, Any], key: str) -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string.")
    return value


def _parse_images(raw: Any) -> List[ImageRef]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValidationError("images must be a list.")
    images: List[ImageRef] = []
    for item in raw:
        if not isinstance(item, dict):
            raise ValidationError("Each image must be an object.")
        alt = item.get("alt")
        images.append(ImageRef(alt=alt if isinstance(alt, str) else None))
    return images
