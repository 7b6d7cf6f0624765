import json
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from booster_components.card_utils.card import Card
from booster_components.card_utils.catalog import CardCatalog, CatalogRegistry
from booster_components.utils.set_configs import get_set_config, make_set_config


def catalog_from_path(path: Union[str, Path]) -> CardCatalog:
    """
    Load a CardCatalog from a JSON file.

    Expected layout:
        {"set_code": "SOR", "cards": [...], "config": {...}}

    `config` is optional for the built-in sets. Cards belonging to another set
    are ignored.

    :param path: path to the catalog file
    """
    with open(path, 'r') as f:
        data = json.load(f)

    set_code = data.get('set_code')
    if not set_code:
        raise ValueError("No set_code in JSON")

    if data.get('config'):
        overrides = dict(data['config'])
        set_number = overrides.pop('set_number', None)
        if set_number is None:
            raise ValueError("config has no set_number")
        overrides.pop('set_code', None)
        config = make_set_config(set_code, set_number, **overrides)
    else:
        config = get_set_config(set_code)
        if config is None:
            raise ValueError(f"No config for unknown set {set_code}")

    cards = [Card.model_validate(raw) for raw in data.get('cards', [])]
    return CardCatalog([c for c in cards if c.set_code == set_code], config)


def scan_catalog_dir(catalog_dir: Path, registry: CatalogRegistry) -> Dict[str, Any]:
    """
    Scan a directory for *.json catalogs and register any set not loaded yet.
    Returns dict with the set codes added, skipped, and errors.
    """
    results = {
        "added": [],
        "skipped": [],
        "errors": []
    }

    for json_file in sorted(Path(catalog_dir).glob("*.json")):
        try:
            catalog = catalog_from_path(json_file)
        except json.JSONDecodeError:
            results["errors"].append(f"{json_file.name}: Invalid JSON")
            continue
        except (ValidationError, ValueError) as e:
            results["errors"].append(f"{json_file.name}: {str(e)}")
            continue

        if catalog.set_code in registry:
            results["skipped"].append(catalog.set_code)
            continue

        registry.add(catalog)
        results["added"].append(catalog.set_code)

    return results
