"""
Layout Preset Resolution

Applies named layout presets to LayoutSettings. Presets are composable and can
override each other, allowing flexible combination of spacing and type choices.

Examples:
    # Apply multiple presets (later overrides earlier)
    >>> apply_presets(LayoutSettings(), ["spacing_compact", "type_small"])

    # Denser spacing with a serif face
    >>> apply_presets(LayoutSettings(), ["spacing_tight", "type_serif"])
"""

import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from vellum.contexts.typesetting.layout_settings import LayoutSettings

load_dotenv()
LAYOUT_PRESETS_PATH = Path(
    os.getenv("LAYOUT_PRESETS_PATH", str(Path(__file__).parent / "layout_presets.yaml"))
)


def load_layout_presets(config_path: Optional[Path] = None) -> Dict[str, Dict[str, Any]]:
    """
    Load layout_presets.yaml and flatten to a single-level dict.

    Collapses nested structure: spacing.compact -> spacing_compact

    Args:
        config_path: Optional path to config file (defaults to LAYOUT_PRESETS_PATH)

    Returns:
        Flattened dict mapping preset names to setting overrides
        Example: {"spacing_compact": {"line_height_factor": 1.3, ...}, ...}
    """
    if config_path is None:
        config_path = LAYOUT_PRESETS_PATH

    nested = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

    flattened = {}
    for category, presets in nested.items():
        for name, config in presets.items():
            flattened[f"{category}_{name}"] = config or {}

    return flattened


def apply_presets(
    settings: LayoutSettings,
    preset_names: List[str],
    config_path: Optional[Path] = None,
) -> LayoutSettings:
    """
    Apply named presets to layout settings.

    Presets are applied in order, with later presets overriding earlier ones.
    Each preset's keys must be LayoutSettings field names.

    Args:
        settings: Base settings (left unchanged)
        preset_names: Preset names to apply (e.g., ["spacing_compact", "type_small"])
        config_path: Optional path to layout_presets.yaml (defaults to LAYOUT_PRESETS_PATH)

    Returns:
        New LayoutSettings with presets applied

    Raises:
        ValueError: If a preset is not found or sets an unknown field
    """
    presets_dict = load_layout_presets(config_path)
    known_fields = set(LayoutSettings.field_names())

    for preset_name in preset_names:
        if preset_name not in presets_dict:
            available = list(presets_dict.keys())
            raise ValueError(f"Preset '{preset_name}' not found. Available presets: {available}")

        preset_config = presets_dict[preset_name]

        unknown = sorted(set(preset_config) - known_fields)
        if unknown:
            raise ValueError(f"Preset '{preset_name}' sets unknown layout fields: {unknown}")

        settings = replace(settings, **preset_config)

    return settings
