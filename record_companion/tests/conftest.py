import itertools
import json
import sys
import types
from pathlib import Path

import pytest

from record_companion.pipeline import CodeGeneratorConfig, PipelineGenerator

TEST_DATA = Path(__file__).parent / "test_data"

_module_ids = itertools.count()


def _read_declaration(name: str) -> dict:
    with open(TEST_DATA / name) as f:
        return json.load(f)


@pytest.fixture
def load_declaration():
    """Load a declaration document from test_data."""
    return _read_declaration


@pytest.fixture
def load_companion():
    """Generate a companion module and import it as a real module."""
    loaded = []

    def _load(document: dict, config: CodeGeneratorConfig | None = None) -> types.ModuleType:
        code = PipelineGenerator(document, config).generate()
        name = f"_generated_companion_{next(_module_ids)}"
        module = types.ModuleType(name)
        # dataclasses resolves string annotations through sys.modules
        sys.modules[name] = module
        loaded.append(name)
        exec(compile(code, f"<{name}>", "exec"), module.__dict__)
        return module

    yield _load

    for name in loaded:
        sys.modules.pop(name, None)
