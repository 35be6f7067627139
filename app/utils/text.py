from typing import Any


def require_text(value: Any, field_name: str) -> str:
    """Retourne `value` nettoyé (strip) ; ValueError si ce n'est pas une chaîne non vide."""
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field_name} cannot be empty")
    return value.strip()
