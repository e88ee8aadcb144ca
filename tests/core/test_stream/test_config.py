"""Tests for StreamConfig validation and the creation-time USD floor."""

from dataclasses import replace

import pytest

from streamer.core.stream import StreamConfig, validate_target_value
from streamer.core.stream.errors import (
    ConfigurationError,
    DecimalsNotInBoundsError,
    DurationTooShortError,
    InvalidPriceError,
    NoticePeriodExceedsDurationError,
    SlippageExceedsScaleError,
    TargetAmountTooLowError,
    ZeroAddressError,
    ZeroAmountError,
)
from streamer.core.stream.math import MIN_DURATION, SLIPPAGE_SCALE
from streamer.state.canonical import ZERO_ADDRESS

DAY = 86_400


def _config(**overrides) -> StreamConfig:
    kwargs = dict(
        distribution_asset="0x" + "c0" * 20,
        distribution_oracle="comp-usd",
        reference_oracle="usdc-usd",
        return_address="0x" + "aa" * 20,
        payer="0x" + "bb" * 20,
        recipient="0x" + "cc" * 20,
        distribution_decimals=18,
        reference_decimals=6,
        target_amount=2_000_000 * 10**6,
        slippage=500_000,
        claim_cooldown=7 * DAY,
        sweep_cooldown=10 * DAY,
        duration=365 * DAY,
        notice_period=30 * DAY,
        distribution_price_decimals=8,
        reference_price_decimals=8,
    )
    kwargs.update(overrides)
    return StreamConfig(**kwargs)


class TestValidConfig:
    def test_builds(self):
        c = _config()
        assert c.target_amount == 2_000_000 * 10**6
        assert c.distribution_price_decimals == 8
        assert c.reference_price_decimals == 8

    def test_price_decimals_are_required(self):
        kwargs = {f: getattr(_config(), f) for f in StreamConfig.__dataclass_fields__}
        del kwargs["reference_price_decimals"]
        with pytest.raises(TypeError):
            StreamConfig(**kwargs)

    def test_frozen(self):
        c = _config()
        with pytest.raises(AttributeError):
            c.slippage = 0  # type: ignore

    def test_boundaries_accepted(self):
        c = _config(
            slippage=SLIPPAGE_SCALE,
            claim_cooldown=MIN_DURATION,
            sweep_cooldown=MIN_DURATION,
            duration=MIN_DURATION,
            notice_period=MIN_DURATION,
            distribution_decimals=6,
            reference_decimals=18,
        )
        assert c.notice_period == c.duration


class TestZeroAddress:
    @pytest.mark.parametrize(
        "field",
        ["distribution_asset", "distribution_oracle", "reference_oracle", "return_address", "payer", "recipient"],
    )
    def test_zero_address_rejected(self, field):
        with pytest.raises(ZeroAddressError):
            _config(**{field: ZERO_ADDRESS})

    def test_empty_identity_rejected(self):
        with pytest.raises(ZeroAddressError):
            _config(recipient="")

    def test_is_configuration_error_and_value_error(self):
        with pytest.raises(ConfigurationError):
            _config(payer=ZERO_ADDRESS)
        with pytest.raises(ValueError):
            _config(payer=ZERO_ADDRESS)


class TestAmounts:
    def test_zero_target(self):
        with pytest.raises(ZeroAmountError):
            _config(target_amount=0)

    def test_slippage_above_scale(self):
        with pytest.raises(SlippageExceedsScaleError):
            _config(slippage=SLIPPAGE_SCALE + 1)

    def test_negative_slippage(self):
        with pytest.raises(SlippageExceedsScaleError):
            _config(slippage=-1)


class TestDurations:
    @pytest.mark.parametrize("field", ["claim_cooldown", "sweep_cooldown", "duration", "notice_period"])
    def test_below_minimum(self, field):
        with pytest.raises(DurationTooShortError):
            _config(**{field: MIN_DURATION - 1})

    def test_notice_longer_than_duration(self):
        with pytest.raises(NoticePeriodExceedsDurationError):
            _config(duration=30 * DAY, notice_period=31 * DAY)


class TestDecimals:
    @pytest.mark.parametrize(
        "field",
        ["distribution_decimals", "reference_decimals", "distribution_price_decimals", "reference_price_decimals"],
    )
    @pytest.mark.parametrize("value", [5, 19])
    def test_out_of_bounds(self, field, value):
        with pytest.raises(DecimalsNotInBoundsError):
            _config(**{field: value})


class TestTargetValue:
    def test_two_million_usdc_passes(self):
        validate_target_value(_config(), 100_000_000)

    def test_below_one_dollar(self):
        c = _config(target_amount=999_999)
        with pytest.raises(TargetAmountTooLowError):
            validate_target_value(c, 100_000_000)

    def test_one_dollar_at_higher_price_passes(self):
        # 0.5 units of reference at 2 USD == 1 USD
        c = _config(target_amount=500_000)
        validate_target_value(c, 200_000_000)

    def test_non_positive_price(self):
        with pytest.raises(InvalidPriceError):
            validate_target_value(_config(), 0)

    def test_reference_price_decimals_respected(self):
        c = replace(_config(target_amount=1_000_000), reference_price_decimals=18)
        # 1.0 reference unit at 1e-10 USD is far below the floor.
        with pytest.raises(TargetAmountTooLowError):
            validate_target_value(c, 10**8)
