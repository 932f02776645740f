"""Loading of YAML states files for CLI commands."""

import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from statepermit.cli.console import get_console
from statepermit.domain.shared.error import ConfigurationError
from statepermit.infrastructure.memory.state_registry import InMemoryStateRegistry, StatesFile


def load_registry(path: Path) -> InMemoryStateRegistry:
    """Load a states file into a registry, exiting with status 1 on failure."""
    console = get_console()
    try:
        return InMemoryStateRegistry.from_states_file(StatesFile.load(path))
    except FileNotFoundError:
        console.error(f"States file not found: {path}")
    except yaml.YAMLError as e:
        console.error(f"States file is not valid YAML: {e}")
    except ValidationError as e:
        console.error(f"States file has an invalid structure: {e.error_count()} error(s)")
    except ConfigurationError as e:
        console.error(e.message, hint="Declare parent states before their children.")
    sys.exit(1)
