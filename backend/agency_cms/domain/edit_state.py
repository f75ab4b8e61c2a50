"""
Editable, in-memory copy of the home-page aggregate.

Every mutator is pure: it returns a new ``HomeEditState`` and never touches
the one it was given, so a failed network call can simply keep using the
previous state. List items are addressed by a locally generated ``key``.
``id`` stays ``None`` until the backing store has assigned one, which is
what separates a draft from a persisted row.
"""
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from werkzeug.datastructures import FileStorage

from agency_cms.models.home_content import CONTENT_FIELDS

IMAGE_TYPES = ("url", "file")
STAT_FIELDS = ("number", "label", "icon")
SERVICE_FIELDS = ("title", "description")


def new_key() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class ImageSource:
    type: str = "url"
    value: Any = ""  # URL string, or a FileStorage waiting to be uploaded
    preview: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.type == "file" and isinstance(self.value, FileStorage)

    @property
    def url(self) -> Optional[str]:
        if isinstance(self.value, str):
            return self.value
        if self.value is None:
            return ""
        return None


@dataclass(frozen=True)
class HeroImageItem:
    key: str
    image: ImageSource
    id: Optional[str] = None

    @property
    def is_draft(self) -> bool:
        return self.id is None


@dataclass(frozen=True)
class StatItem:
    key: str
    number: str = ""
    label: str = ""
    icon: str = ""
    id: Optional[str] = None

    @property
    def is_draft(self) -> bool:
        return self.id is None


@dataclass(frozen=True)
class ServicePreviewItem:
    key: str
    title: str = ""
    description: str = ""
    image: ImageSource = field(default_factory=ImageSource)
    id: Optional[str] = None

    @property
    def is_draft(self) -> bool:
        return self.id is None


def _empty_content() -> Dict[str, Any]:
    content: Dict[str, Any] = {"id": None}
    content.update({name: "" for name in CONTENT_FIELDS})
    return content


@dataclass(frozen=True)
class HomeEditState:
    content: Mapping[str, Any] = field(default_factory=_empty_content)
    hero_images: Tuple[HeroImageItem, ...] = ()
    stats: Tuple[StatItem, ...] = ()
    services_preview: Tuple[ServicePreviewItem, ...] = ()


def empty_state() -> HomeEditState:
    return HomeEditState()


# ------------------------
# Helpers
# ------------------------

def _replace_item(items, key, change):
    found = False
    updated = []
    for item in items:
        if item.key == key:
            updated.append(change(item))
            found = True
        else:
            updated.append(item)

    if not found:
        raise KeyError(key)

    return tuple(updated)


def _remove_item(items, key):
    remaining = tuple(item for item in items if item.key != key)
    if len(remaining) == len(items):
        raise KeyError(key)
    return remaining


def _url_image(url: Optional[str]) -> ImageSource:
    url = url or ""
    return ImageSource(type="url", value=url, preview=url or None)


def _switch_image_type(image: ImageSource, image_type: str) -> ImageSource:
    if image_type not in IMAGE_TYPES:
        raise ValueError(f"Invalid image type: {image_type}")

    if image_type == "url" and image.type == "file" and not isinstance(image.value, str):
        # Drop the chosen file; a URL typed before switching survives
        return ImageSource(type="url", value="", preview=None)

    return replace(image, type=image_type)


def _set_image_value(image: ImageSource, value: Any) -> ImageSource:
    if isinstance(value, FileStorage):
        if image.type != "file":
            raise ValueError("Switch the image to 'file' before choosing a file")
        return replace(image, value=value, preview=value.filename)

    if image.type == "file" and value is not None:
        raise ValueError("A file image only accepts an uploaded file")

    if value is None:
        return replace(image, value=None, preview=None)

    return replace(image, value=value, preview=value or None)


# ------------------------
# Conversion
# ------------------------

def from_view_model(view: Mapping[str, Any]) -> HomeEditState:
    content = _empty_content()
    for name, value in (view.get("content") or {}).items():
        if name == "id" or name in CONTENT_FIELDS:
            content[name] = value if value is not None or name == "id" else ""

    hero_images = tuple(
        HeroImageItem(key=new_key(), id=row.get("id"), image=_url_image(row.get("image_url")))
        for row in view.get("hero_images") or []
    )
    stats = tuple(
        StatItem(
            key=new_key(),
            id=row.get("id"),
            number=row.get("number") or "",
            label=row.get("label") or "",
            icon=row.get("icon") or "",
        )
        for row in view.get("stats") or []
    )
    services_preview = tuple(
        ServicePreviewItem(
            key=new_key(),
            id=row.get("id"),
            title=row.get("title") or "",
            description=row.get("description") or "",
            image=_url_image((row.get("image") or {}).get("url")),
        )
        for row in view.get("services_preview") or []
    )

    return HomeEditState(
        content=content,
        hero_images=hero_images,
        stats=stats,
        services_preview=services_preview,
    )


def pending_files(state: HomeEditState) -> List[Tuple[str, str, ImageSource]]:
    """(collection, item key, image) for every image still awaiting upload."""
    pending = [
        ("hero_images", item.key, item.image)
        for item in state.hero_images
        if item.image.is_pending
    ]
    pending.extend(
        ("services_preview", item.key, item.image)
        for item in state.services_preview
        if item.image.is_pending
    )
    return pending


# ------------------------
# Content
# ------------------------

def set_content_field(state: HomeEditState, name: str, value: str) -> HomeEditState:
    if name not in CONTENT_FIELDS:
        raise ValueError(f"Invalid content field: {name}")

    content = dict(state.content)
    content[name] = value or ""
    return replace(state, content=content)


# ------------------------
# Hero images
# ------------------------

def add_hero_image(state: HomeEditState, *, url: str = "", id: Optional[str] = None) -> HomeEditState:
    item = HeroImageItem(key=new_key(), id=id, image=_url_image(url))
    return replace(state, hero_images=state.hero_images + (item,))


def set_hero_image_type(state: HomeEditState, key: str, image_type: str) -> HomeEditState:
    return replace(
        state,
        hero_images=_replace_item(
            state.hero_images,
            key,
            lambda item: replace(item, image=_switch_image_type(item.image, image_type)),
        ),
    )


def set_hero_image_value(state: HomeEditState, key: str, value: Any) -> HomeEditState:
    return replace(
        state,
        hero_images=_replace_item(
            state.hero_images,
            key,
            lambda item: replace(item, image=_set_image_value(item.image, value)),
        ),
    )


def remove_hero_image(state: HomeEditState, key: str) -> HomeEditState:
    return replace(state, hero_images=_remove_item(state.hero_images, key))


# ------------------------
# Stats
# ------------------------

def add_stat(
    state: HomeEditState,
    *,
    number: str = "",
    label: str = "",
    icon: str = "",
    id: Optional[str] = None,
) -> HomeEditState:
    item = StatItem(key=new_key(), id=id, number=number, label=label, icon=icon)
    return replace(state, stats=state.stats + (item,))


def set_stat_field(state: HomeEditState, key: str, name: str, value: str) -> HomeEditState:
    if name not in STAT_FIELDS:
        raise ValueError(f"Invalid stat field: {name}")

    return replace(
        state,
        stats=_replace_item(state.stats, key, lambda item: replace(item, **{name: value or ""})),
    )


def remove_stat(state: HomeEditState, key: str) -> HomeEditState:
    return replace(state, stats=_remove_item(state.stats, key))


# ------------------------
# Service previews
# ------------------------

def add_service_preview(
    state: HomeEditState,
    *,
    title: str = "",
    description: str = "",
    image_url: str = "",
    id: Optional[str] = None,
) -> HomeEditState:
    item = ServicePreviewItem(
        key=new_key(),
        id=id,
        title=title,
        description=description,
        image=_url_image(image_url),
    )
    return replace(state, services_preview=state.services_preview + (item,))


def set_service_field(state: HomeEditState, key: str, name: str, value: str) -> HomeEditState:
    if name not in SERVICE_FIELDS:
        raise ValueError(f"Invalid service preview field: {name}")

    return replace(
        state,
        services_preview=_replace_item(
            state.services_preview, key, lambda item: replace(item, **{name: value or ""})
        ),
    )


def set_service_image_type(state: HomeEditState, key: str, image_type: str) -> HomeEditState:
    return replace(
        state,
        services_preview=_replace_item(
            state.services_preview,
            key,
            lambda item: replace(item, image=_switch_image_type(item.image, image_type)),
        ),
    )


def set_service_image_value(state: HomeEditState, key: str, value: Any) -> HomeEditState:
    return replace(
        state,
        services_preview=_replace_item(
            state.services_preview,
            key,
            lambda item: replace(item, image=_set_image_value(item.image, value)),
        ),
    )


def remove_service_preview(state: HomeEditState, key: str) -> HomeEditState:
    return replace(state, services_preview=_remove_item(state.services_preview, key))


# ------------------------
# Save payload
# ------------------------

def _payload_url(value):
    if value is not None and not isinstance(value, str):
        raise ValueError(f"Image URL must be a string, got {type(value).__name__}")
    return value or ""


def _apply_image(state, key, image, files, set_type, set_value):
    """Apply a payload image (``{"url"}`` or ``{"type", "value"}``) to one item."""
    if not image or "url" in image:
        return state

    image_type = image.get("type", "url")
    state = set_type(state, key, image_type)

    if image_type == "file":
        field_name = image.get("value")
        upload = files.get(field_name) if field_name else None
        if upload is None:
            raise ValueError(f"Missing uploaded file for field {field_name!r}")
        return set_value(state, key, upload)

    return set_value(state, key, _payload_url(image.get("value")))


def from_payload(data: Mapping[str, Any], files: Optional[Mapping[str, FileStorage]] = None) -> HomeEditState:
    """
    Build an edit state from a save request.

    ``data`` has the view-model shape. An image may also be given as
    ``{"type": "file", "value": "<form field>"}``, naming a file part
    found in ``files``.
    """
    files = files or {}
    state = empty_state()

    content = data.get("content") or {}
    for name in CONTENT_FIELDS:
        if name in content:
            state = set_content_field(state, name, content[name])
    if content.get("id"):
        state = replace(state, content={**state.content, "id": content["id"]})

    for row in data.get("hero_images") or []:
        image = row.get("image") or {}
        state = add_hero_image(
            state,
            url=_payload_url(image.get("url")) or _payload_url(row.get("image_url")),
            id=row.get("id"),
        )
        state = _apply_image(
            state, state.hero_images[-1].key, image, files,
            set_hero_image_type, set_hero_image_value,
        )

    for row in data.get("stats") or []:
        state = add_stat(
            state,
            number=row.get("number") or "",
            label=row.get("label") or "",
            icon=row.get("icon") or "",
            id=row.get("id"),
        )

    for row in data.get("services_preview") or []:
        image = row.get("image") or {}
        state = add_service_preview(
            state,
            title=row.get("title") or "",
            description=row.get("description") or "",
            image_url=_payload_url(image.get("url")) or _payload_url(row.get("image_url")),
            id=row.get("id"),
        )
        state = _apply_image(
            state, state.services_preview[-1].key, image, files,
            set_service_image_type, set_service_image_value,
        )

    return state
