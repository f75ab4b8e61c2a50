from agency_cms.models.home_content import CONTENT_FIELDS

def normalize_content(content):
    if content is None:
        return empty_content()

    data = {"id": content.id}
    for field in CONTENT_FIELDS:
        data[field] = getattr(content, field) or ""
    return data

def empty_content():
    data = {"id": None}
    data.update({field: "" for field in CONTENT_FIELDS})
    return data

def normalize_hero_image(image):
    return {
        "id": image.id,
        "image_url": image.image_url,
        "display_order": image.display_order,
    }

def normalize_stat(stat):
    return {
        "id": stat.id,
        "number": stat.number,
        "label": stat.label,
        "icon": stat.icon or "",
        "display_order": stat.display_order,
    }

def normalize_service_preview(service):
    return {
        "id": service.id,
        "title": service.title,
        "description": service.description or "",
        "image": {"url": service.image_url or ""},
        "display_order": service.display_order,
    }

def normalize_home_page(content, hero_images, stats, services_preview):
    return {
        "content": normalize_content(content),
        "hero_images": [normalize_hero_image(i) for i in hero_images],
        "stats": [normalize_stat(s) for s in stats],
        "services_preview": [normalize_service_preview(s) for s in services_preview],
    }

def empty_home_page():
    return {
        "content": empty_content(),
        "hero_images": [],
        "stats": [],
        "services_preview": [],
    }
