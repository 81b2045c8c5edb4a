from .dates import iso


def normalize_collection_item(item, admin=False):
    data = dict(item.data or {})
    data.update({
        "id": item.id,
        "display_order": item.display_order,
        "is_active": item.is_active,
    })
    if item.slug is not None:
        data["slug"] = item.slug

    if admin:
        data["created_at"] = iso(item.created_at)
        data["updated_at"] = iso(item.updated_at)

    return data
