"""
Blocs de base — coercitions tolérantes + BaseBlock discriminé par `type`.

Un champ mal formé se dégrade en valeur vide ou None, jamais en exception :
le contenu vient de l'éditeur, pas d'un contrat strict.
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator


# ── Coercitions ─────────────────────────────────────────────────────────────

def coerce_text(value: Any) -> Union[str, Dict[str, str]]:
    """str | {lang: str} ; tout le reste → ""."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        return {str(k): v for k, v in value.items() if isinstance(v, str)}
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def coerce_optional_str(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def coerce_number(value: Any) -> Optional[Union[int, float]]:
    """Prix : 1500, "1500", "1 500,50" → nombre ; invalide → None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        cleaned = value.replace(" ", "").replace("\u00a0", "").replace(",", ".")
        try:
            number = float(cleaned)
        except ValueError:
            return None
    else:
        return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def coerce_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return False


def coerce_dict_list(value: Any) -> List[dict]:
    """Liste d'objets ; les entrées non-dict sont ignorées."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


# ── Modèles ─────────────────────────────────────────────────────────────────

class BlockModel(BaseModel):
    """Modèle tolérant : accepte camelCase (stockage) et snake_case."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class BaseBlock(BlockModel):
    """Bloc de base (classe parente de tous les blocs)."""
    type: str
    id: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, v):
        return coerce_optional_str(v)


class GenericBlock(BaseBlock):
    """Type inconnu : conservé pour les comptages, contenu ignoré."""
    type: str = "unknown"
