import pytest

from poker_ledger.config import ConfigError, load_settings


def test_defaults_without_environment() -> None:
    settings = load_settings({})

    assert settings.min_transfer == 5
    assert settings.epsilon == 0.01
    assert settings.max_partition_size == 15
    assert settings.round_digits == 2


def test_values_are_read_from_environment() -> None:
    settings = load_settings(
        {
            "SETTLEMENT_MIN_TRANSFER": "20",
            "SETTLEMENT_EPSILON": "0.5",
            "SETTLEMENT_MAX_PARTITION_SIZE": "10",
            "SETTLEMENT_ROUND_DIGITS": "3",
        }
    )

    assert settings.min_transfer == 20
    assert settings.epsilon == 0.5
    assert settings.max_partition_size == 10
    assert settings.round_digits == 3


def test_process_environment_is_used_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SETTLEMENT_MIN_TRANSFER", "12.5")

    assert load_settings().min_transfer == 12.5


@pytest.mark.parametrize(
    "environ, variable",
    [
        ({"SETTLEMENT_MIN_TRANSFER": "five"}, "SETTLEMENT_MIN_TRANSFER"),
        ({"SETTLEMENT_MAX_PARTITION_SIZE": "1.5"}, "SETTLEMENT_MAX_PARTITION_SIZE"),
        ({"SETTLEMENT_ROUND_DIGITS": "x"}, "SETTLEMENT_ROUND_DIGITS"),
    ],
)
def test_unparseable_values_name_the_variable(environ, variable) -> None:
    with pytest.raises(ConfigError, match=variable):
        load_settings(environ)


def test_out_of_range_values_raise_config_error() -> None:
    with pytest.raises(ConfigError):
        load_settings({"SETTLEMENT_MAX_PARTITION_SIZE": "40"})
