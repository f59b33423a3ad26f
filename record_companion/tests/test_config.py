import pytest

from record_companion.pipeline import CodeGeneratorConfig, FormatterConfig, OutputMode


def test_defaults():
    config = CodeGeneratorConfig()

    assert config.add_generation_comment is True
    assert config.runtime_module == "record_companion.runtime"
    assert config.formatter == FormatterConfig()
    assert config.formatter.enabled is False
    assert config.output.mode is OutputMode.ERROR_IF_EXISTS
    assert config.output.validate_before_write is True


def test_from_dict():
    config = CodeGeneratorConfig.from_dict(
        {
            "add_generation_comment": False,
            "runtime_module": "app.runtime",
            "formatter": {"enabled": True, "tool": "ruff", "line_length": 88},
            "output": {"mode": "force", "atomic_write": False},
        }
    )

    assert config.add_generation_comment is False
    assert config.runtime_module == "app.runtime"
    assert config.formatter.tool == "ruff"
    assert config.formatter.line_length == 88
    assert config.formatter.target_version == "py312"
    assert config.output.mode is OutputMode.FORCE
    assert config.output.atomic_write is False
    assert config.output.validate_before_write is True


def test_from_dict_ignores_unknown_keys():
    config = CodeGeneratorConfig.from_dict({"unknown": 1})

    assert not hasattr(config, "unknown")
    assert config.to_dict() == CodeGeneratorConfig().to_dict()


def test_from_dict_rejects_unknown_output_mode():
    with pytest.raises(ValueError):
        CodeGeneratorConfig.from_dict({"output": {"mode": "merge"}})


def test_to_dict_round_trip():
    config = CodeGeneratorConfig.from_dict({"formatter": {"enabled": True}, "output": {"mode": "force"}})
    data = config.to_dict()

    assert data["output"]["mode"] == "force"
    assert data["formatter"]["enabled"] is True
    assert CodeGeneratorConfig.from_dict(data) == config
