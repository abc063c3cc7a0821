# main.py
"""Data-generation entry point.

Reads ``config/registrate.yaml`` and ``config/items.yaml``, registers the
configured items and writes their models, translations, recipes and tags.
"""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List
from typing import Dict as PyDict

import structlog
import yaml

from game.items.item import ItemGroup
from game.items.registry import ItemRegistry
from registrate import Registrate, register_item_definitions
from utils.logging_utils import setup_logging

# --- Paths relative to this script's location ---
SCRIPT_DIR = Path(__file__).parent.resolve()
CONFIG_DIR = SCRIPT_DIR / "config"

CONFIG_FILE = CONFIG_DIR / "registrate.yaml"
ITEMS_CONFIG_FILE = CONFIG_DIR / "items.yaml"
# --- End Paths ---

log = structlog.get_logger()


# --- Config Loading Helpers ---
def load_yaml_config(config_path: Path, config_name: str) -> PyDict[str, Any]:
    """Loads a generic YAML configuration file."""
    if not config_path.is_file():
        log.error(f"{config_name} config file not found", path=str(config_path))
        raise FileNotFoundError(f"{config_name} configuration file not found: {config_path}")
    try:
        with config_path.open("r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
        if config_data is None:
            log.warning(f"{config_name} config file is empty.", path=str(config_path))
            return {}
        log.info(f"{config_name} config loaded", path=str(config_path))
        return config_data
    except yaml.YAMLError as e:
        log.error(
            f"Error parsing YAML for {config_name}",
            path=str(config_path),
            error=str(e),
            exc_info=True,
        )
        raise


@dataclass
class Configs:
    main: PyDict[str, Any]
    groups: List[str]
    items: List[PyDict[str, Any]]


def load_configs(config_dir: Path = CONFIG_DIR) -> Configs:
    main_config = load_yaml_config(config_dir / CONFIG_FILE.name, "Main")
    items_config = load_yaml_config(config_dir / ITEMS_CONFIG_FILE.name, "Items")
    configs = Configs(
        main=main_config,
        groups=[str(label) for label in items_config.get("groups", [])],
        items=list(items_config.get("items", [])),
    )
    log.info("Configurations loaded", groups=len(configs.groups), items=len(configs.items))
    return configs
# --- End Config Loading ---


def resolve_output_dir(configs: Configs, output_dir: Path | str | None = None) -> Path:
    if output_dir is not None:
        return Path(output_dir)
    configured = Path(configs.main.get("output_dir", "generated"))
    return configured if configured.is_absolute() else SCRIPT_DIR / configured


def run_data_generation(configs: Configs, output_dir: Path | str | None = None) -> List[Path]:
    """Register the configured items and write their generated data."""
    registrate = Registrate.from_config(configs.main)
    groups = {label: ItemGroup(label) for label in configs.groups}
    register_item_definitions(registrate, configs.items, groups)

    item_registry = ItemRegistry()
    registrate.register_all(item_registry)
    return registrate.run_data_generation(resolve_output_dir(configs, output_dir))


def main(argv: List[str] | None = None) -> int:
    """Main entry point. An optional single argument overrides the output directory."""
    argv = sys.argv[1:] if argv is None else argv
    configs = load_configs()
    setup_logging(configs.main.get("log_level", "INFO"), configs.main.get("log_format", "console"))
    log.info("Data generation starting...", config_dir=str(CONFIG_DIR))
    written = run_data_generation(configs, argv[0] if argv else None)
    log.info("Data generation complete", files=len(written))
    return 0


if __name__ == "__main__":
    sys.exit(main())
