#!/usr/bin/env python3
"""
Configuration for the VCO simulator
Environment variables (VCO_*) with an optional .env.vco file
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict

ENV_FILE = ".env.vco"
_INLINE_COMMENT = re.compile(r"\s+#")

DEFAULTS = {
    'VCO_GAIN': '1.0',
    'VCO_TICK_MS': '100',
    'VCO_WAVE': 'sine',
    'VCO_OSC_HOST': '127.0.0.1',
    'VCO_OSC_PORT': '5005',
    'VCO_OUT_PORT': '5006',
    'VCO_VERBOSE': '0',
}


def load_env_file(env_path: str = ENV_FILE, apply: bool = True) -> Dict[str, str]:
    """
    Load KEY=VALUE pairs from an env file.

    Looks in the given path, the project root, then the working
    directory; the first file found wins. Existing environment
    variables are not overridden.
    """
    env_vars = {}

    locations = [
        Path(env_path),
        Path(__file__).parent.parent.parent / env_path,
        Path.cwd() / env_path
    ]

    for location in locations:
        if location.exists():
            with open(location, 'r') as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith('#'):
                        if '=' in line:
                            key, value = line.split('=', 1)
                            # Inline comments need whitespace before the #,
                            # so values like /vco#1 survive
                            value = _INLINE_COMMENT.split(value, 1)[0]
                            env_vars[key.strip()] = value.strip()
            logging.getLogger(__name__).debug("Loaded config from: %s", location)
            break

    if apply:
        for key, value in env_vars.items():
            os.environ.setdefault(key, value)

    return env_vars


def _env(key: str) -> str:
    return os.environ.get(key, DEFAULTS[key])


def _parse(key: str, convert):
    raw = _env(key)
    try:
        return convert(raw)
    except ValueError:
        raise ValueError(f"Invalid value for {key}: {raw!r}") from None


def get_config() -> Dict[str, Any]:
    """Get parsed configuration values"""
    config = {
        # Oscillator
        'gain': _parse('VCO_GAIN', float),
        'tick_ms': _parse('VCO_TICK_MS', float),
        'wave': _env('VCO_WAVE'),

        # OSC
        'osc_host': _env('VCO_OSC_HOST'),
        'osc_port': _parse('VCO_OSC_PORT', int),
        'out_port': _parse('VCO_OUT_PORT', int),

        # Debug
        'verbose': _env('VCO_VERBOSE') == '1',
    }

    if config['tick_ms'] <= 0:
        raise ValueError(f"VCO_TICK_MS must be positive, got {config['tick_ms']}")

    return config


def configure_logging(verbose: bool = False) -> None:
    """Basic console logging; DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(name)s] %(levelname)s: %(message)s",
    )


def print_config():
    """Print current configuration"""
    config = get_config()

    print("\n" + "="*60)
    print("VCO SIMULATOR CONFIGURATION")
    print("="*60)

    sections = {
        'Oscillator': ['gain', 'tick_ms', 'wave'],
        'OSC': ['osc_host', 'osc_port', 'out_port'],
        'Debug': ['verbose']
    }

    for section, keys in sections.items():
        print(f"\n{section}:")
        for key in keys:
            if key in config:
                print(f"  {key}: {config[key]}")

    print("\n" + "="*60 + "\n")


if __name__ == "__main__":
    load_env_file()
    print_config()
