from .dates import iso


def normalize_section_row(row, admin=False):
    data = {
        "id": row.id,
        "section_key": row.section_key,
        "is_active": row.is_active,
        "content": row.content or {},
        "updated_at": iso(row.updated_at),
    }

    if admin:
        data["created_at"] = iso(row.created_at)
        data["updated_by"] = row.updated_by

    return data


def normalize_section_state(state, admin=False):
    """The binder's view of a section: ``ready`` with its row, or ``empty`` with defaults."""
    data = {
        "key": state.spec.key,
        "label": state.spec.label,
        "state": state.state,
        "content": state.content,
        "id": state.row.id if state.row else None,
        "updated_at": iso(state.row.updated_at) if state.row else None,
    }

    if admin:
        data["fields"] = [
            {
                "name": f.name,
                "kind": f.kind,
                "required": f.required,
                "default": f.default_value(),
                "choices": list(f.choices),
            }
            for f in state.spec.fields
        ]

    return data
