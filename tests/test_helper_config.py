import pytest


def test_string_value_is_read_case_insensitively(helper_config, monkeypatch):
    monkeypatch.setenv("EXTDATA_ENGINE", "  AzureDevOps ")
    assert helper_config.get_string_val("extdata_engine") == "AzureDevOps"


def test_missing_required_string_raises(helper_config):
    with pytest.raises(ValueError, match="Environment variable 'EXTDATA_AZUREDEVOPS_ORG_URL' is not set."):
        helper_config.get_string_val("EXTDATA_AZUREDEVOPS_ORG_URL")


def test_empty_value_uses_default(helper_config, monkeypatch):
    monkeypatch.setenv("APP_VERSION", "   ")
    assert helper_config.get_string_val("APP_VERSION", default="unknown") == "unknown"


def test_number_values(helper_config, monkeypatch):
    monkeypatch.setenv("EXTDATA_TIMEOUT", "12")
    assert helper_config.get_number_val("EXTDATA_TIMEOUT") == 12

    monkeypatch.setenv("EXTDATA_TIMEOUT", "2.5")
    assert helper_config.get_number_val("EXTDATA_TIMEOUT") == 2.5

    monkeypatch.setenv("EXTDATA_TIMEOUT", "soon")
    with pytest.raises(ValueError, match="not a valid number"):
        helper_config.get_number_val("EXTDATA_TIMEOUT")


def test_bool_values(helper_config, monkeypatch):
    monkeypatch.setenv("EXTDATA_FLAG", "Yes")
    assert helper_config.get_bool_val("EXTDATA_FLAG") is True

    monkeypatch.setenv("EXTDATA_FLAG", "off")
    assert helper_config.get_bool_val("EXTDATA_FLAG") is False

    monkeypatch.delenv("EXTDATA_FLAG")
    assert helper_config.get_bool_val("EXTDATA_FLAG", default=False) is False


def test_list_values(helper_config, monkeypatch):
    monkeypatch.setenv("EXTDATA_LIST", "[a, b,,c]")
    assert helper_config.get_list_val("EXTDATA_LIST") == ["a", "b", "c"]

    monkeypatch.setenv("EXTDATA_LIST", "[1,2]")
    assert helper_config.get_list_val("EXTDATA_LIST", element_type=int) == [1, 2]

    monkeypatch.setenv("EXTDATA_LIST", "a,b")
    with pytest.raises(ValueError, match="must be in the format"):
        helper_config.get_list_val("EXTDATA_LIST")

    monkeypatch.delenv("EXTDATA_LIST")
    assert helper_config.get_list_val("EXTDATA_LIST", default=[]) == []
