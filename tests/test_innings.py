import math

import pytest

from pyfbb.innings import innings_value, is_valid_baseball_ip, normalize_ip
from pyfbb.utils import round_tenth


@pytest.mark.parametrize(
    ("ip", "outs"),
    [(0, 0), (6.0, 18), (10.0, 30), (10.1, 31), (10.2, 32), (200.2, 602)],
)
def test_normalize_ip_counts_outs(ip, outs):
    result = normalize_ip(ip)
    assert result.valid
    assert result.outs == outs
    assert result.innings == pytest.approx(outs / 3)


@pytest.mark.parametrize("ip", [10.5, 10.3, 7.25, -1.0, math.inf, math.nan])
def test_normalize_ip_rejects_bad_notation(ip):
    result = normalize_ip(ip)
    assert not result.valid
    assert result.outs == 0
    assert result.innings == 0.0
    assert not is_valid_baseball_ip(ip)


def test_innings_value_by_mode():
    assert innings_value(10.1, use_baseball_ip=True) == pytest.approx(31 / 3)
    assert innings_value(10.1, use_baseball_ip=False) == pytest.approx(10.1)
    # invalid outs notation contributes nothing rather than its raw value
    assert innings_value(10.5, use_baseball_ip=True) == 0.0
    assert innings_value(10.5, use_baseball_ip=False) == pytest.approx(10.5)


def test_round_tenth_rounds_half_away_from_zero():
    assert round_tenth(0.25) == pytest.approx(0.3)
    assert round_tenth(-0.25) == pytest.approx(-0.3)
    assert round_tenth(1.04) == pytest.approx(1.0)
    assert round_tenth(0.0) == 0.0
