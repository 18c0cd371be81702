import pytest

from budget_sync.config import SyncConfig, get_env


def test_get_env_returns_default_when_unset(monkeypatch):
    monkeypatch.delenv("SOME_UNSET_VARIABLE", raising=False)
    assert get_env("SOME_UNSET_VARIABLE", default="fallback") == "fallback"


def test_get_env_required_missing_raises(monkeypatch):
    monkeypatch.delenv("BUDGET_THRESHOLD_PARAM", raising=False)
    with pytest.raises(RuntimeError, match="BUDGET_THRESHOLD_PARAM"):
        get_env("BUDGET_THRESHOLD_PARAM", required=True)


def test_get_env_required_blank_raises(monkeypatch):
    monkeypatch.setenv("SPOKE_ROLE_NAME", "   ")
    with pytest.raises(RuntimeError):
        get_env("SPOKE_ROLE_NAME", required=True)


def test_from_env_reads_all_settings(monkeypatch):
    monkeypatch.setenv("BUDGET_THRESHOLD_PARAM", "/BlogBudgets/CostThreshold")
    monkeypatch.setenv("SPOKE_ROLE_NAME", "BlogBudgetsSpokeRole")
    monkeypatch.setenv("SPOKE_ROLE_SESSION_NAME", "CustomSession")
    monkeypatch.setenv("AWS_PARTITION", "aws-us-gov")
    monkeypatch.setenv("REGION", "eu-west-2")

    config = SyncConfig.from_env()

    assert config.parameter_name == "/BlogBudgets/CostThreshold"
    assert config.role_name == "BlogBudgetsSpokeRole"
    assert config.session_name == "CustomSession"
    assert config.partition == "aws-us-gov"
    assert config.client_kwargs() == {"region_name": "eu-west-2"}


def test_from_env_defaults(monkeypatch):
    monkeypatch.setenv("BUDGET_THRESHOLD_PARAM", "/BlogBudgets/CostThreshold")
    monkeypatch.setenv("SPOKE_ROLE_NAME", "BlogBudgetsSpokeRole")
    for name in ("SPOKE_ROLE_SESSION_NAME", "AWS_PARTITION", "REGION"):
        monkeypatch.delenv(name, raising=False)

    config = SyncConfig.from_env()

    assert config.session_name == "BlogBudgetsLambdaSession"
    assert config.partition == "aws"
    assert config.region is None
    assert config.client_kwargs() == {}


def test_role_arn_uses_account_and_partition():
    config = SyncConfig("/p", "SpokeRole", partition="aws-cn")
    assert config.role_arn("111122223333") == "arn:aws-cn:iam::111122223333:role/SpokeRole"
