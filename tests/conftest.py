"""
Shared test fixtures and utilities for the proctree test suite.
"""

import pytest

from proctree.config import (
    ActionConfig,
    BlockConfig,
    ConditionalConfig,
    ProcessConfig,
    ReferenceConfig,
    ValueConfig,
)
from proctree.core import MetadataFlag
from proctree.editor import EditorState, init_editor
from proctree.specification import EngineSpec
from proctree.typesystem import build_type_system

INFLUENCES = {MetadataFlag.INFLUENCES_RETURN_TYPE: True}

ENGINE_SPEC_DATA = {
    "types": {
        "object": {},
        "string": {"supertypes": ["object"]},
        "boolean": {"supertypes": ["object"]},
        "double": {"supertypes": ["object"]},
        "int": {"supertypes": ["double"]},
        "log-level": {"supertypes": ["string"], "values": ["DEBUG", "INFO", "WARN", "ERROR"]},
        "percentage": {"supertypes": ["double"], "minimum": 0, "maximum": 100},
        "zip-code": {"supertypes": ["string"], "pattern": r"\d{5}"},
        "person": {
            "supertypes": ["object"],
            "properties": {
                "name": {"type": "string"},
                "age": {"type": "int", "optional": True},
                "employer": {"type": "company", "optional": True},
            },
        },
        "company": {
            "supertypes": ["object"],
            "properties": {
                "name": {"type": "string"},
                "employees": {"type": "person", "multi": True},
            },
        },
    },
    "processes": {
        "main": {
            "inputs": {
                "customerName": {"type": "string"},
                "customer": {"type": "person"},
            },
        },
        "greeting": {
            "inputs": {"recipient": {"type": "string"}},
            "output": {"type": "string"},
        },
    },
    "actions": {
        "set-variable": {
            "inputs": {
                "value": {"type": "object", "metadata": INFLUENCES},
                "variableName": {"type": "string"},
            },
            "output": {"type": "object"},
        },
        "increment-counter": {
            "inputs": {
                "variableName": {"type": "string"},
                "count": {"type": "int"},
            },
            "output": {"type": "int"},
        },
        "log": {
            "inputs": {
                "message": {"type": "string"},
                "level": {"type": "log-level", "required": False},
            },
        },
        "fetch-person": {
            "inputs": {"id": {"type": "string"}},
            "output": {"type": "person"},
        },
        "collect": {
            "inputs": {"items": {"type": "object", "multi": True, "metadata": INFLUENCES}},
            "output": {"type": "object", "multi": True},
        },
    },
    "functions": {
        "concat": {
            "inputs": {"values": {"type": "string", "multi": True}},
            "output": {"type": "string"},
        },
        "add": {
            "inputs": {"a": {"type": "double"}, "b": {"type": "double"}},
            "output": {"type": "double"},
        },
        "identity": {
            "inputs": {"value": {"type": "object", "metadata": INFLUENCES}},
            "output": {"type": "object"},
        },
        "is-empty": {
            "inputs": {"value": {"type": "string"}},
            "output": {"type": "boolean"},
        },
        "person-name": {
            "inputs": {"person": {"type": "person"}},
            "output": {"type": "string"},
        },
        "split": {
            "inputs": {"text": {"type": "string"}},
            "output": {"type": "string", "multi": True},
        },
    },
}


@pytest.fixture
def engine_spec() -> EngineSpec:
    """Engine specification with a small numeric/string/compound type hierarchy."""
    return EngineSpec.load(ENGINE_SPEC_DATA)


@pytest.fixture
def type_system(engine_spec):
    return build_type_system(engine_spec.types)


@pytest.fixture
def example_config() -> ProcessConfig:
    """set-variable followed by increment-counter, all arguments as literals."""
    return ProcessConfig(
        name="main",
        root_block=BlockConfig(
            executables=[
                ActionConfig(
                    name="set-variable",
                    arguments={
                        "value": [ValueConfig(value="Hello", type_id="string")],
                        "variableName": [ValueConfig(value="World", type_id="string")],
                    },
                ),
                ActionConfig(
                    name="increment-counter",
                    arguments={
                        "variableName": [ValueConfig(value="counterVar", type_id="string")],
                        "count": [ValueConfig(value="2", type_id="int")],
                    },
                ),
            ]
        ),
    )


@pytest.fixture
def conditional_config() -> ProcessConfig:
    """
    fetch-person at [0], a conditional at [1] whose then-branch holds
    increment-counter at [1, 0, 0], and a log at [2] referencing the person name.
    """
    return ProcessConfig(
        name="main",
        root_block=BlockConfig(
            executables=[
                ActionConfig(
                    name="fetch-person",
                    arguments={"id": [ValueConfig(value="42", type_id="string")]},
                ),
                ConditionalConfig(
                    condition=ValueConfig(value="true", type_id="boolean"),
                    blocks=[
                        BlockConfig(
                            executables=[
                                ActionConfig(
                                    name="increment-counter",
                                    arguments={
                                        "variableName": [ValueConfig(value="n", type_id="string")],
                                        "count": [ValueConfig(value="1", type_id="int")],
                                    },
                                )
                            ]
                        ),
                        BlockConfig(),
                    ],
                ),
                ActionConfig(
                    name="log",
                    arguments={
                        "message": [ReferenceConfig(coordinates=[0], path=["name"])],
                        "level": [ValueConfig(value="INFO", type_id="log-level")],
                    },
                ),
            ]
        ),
    )


@pytest.fixture
def editor(engine_spec, example_config) -> EditorState:
    return init_editor(example_config, engine_spec)


@pytest.fixture
def conditional_editor(engine_spec, conditional_config) -> EditorState:
    return init_editor(conditional_config, engine_spec)
