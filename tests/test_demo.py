import pytest

from auctionkit.demo import (
    run_suite,
    run_test1,
    run_test2,
    run_test3,
    run_timeouts1,
    main,
)


@pytest.mark.parametrize("timeout", [-1, 5 * 60 * 1000])
def test_run_test1_collects_two_best(timeout):
    assert run_test1(timeout, -1) == (7, 0)


@pytest.mark.parametrize("timeout", [-1, 5 * 60 * 1000])
def test_run_test2_collects_three_best(timeout):
    assert run_test2(timeout, -1) == (18, 0)


def test_run_test3_leaves_units_unsold():
    assert run_test3(-1, 0) == (5, 3)


def test_run_test1_prints_outcomes(capsys):
    assert run_test1(-1, 1) == (7, 0)
    out = capsys.readouterr().out
    assert "juan won an item for 3" in out
    assert "pedro failed with the offer of 1" in out


def test_run_timeouts1_expired_offer_loses(capsys):
    assert run_timeouts1() == (2, 1)
    out = capsys.readouterr().out
    assert "pedro won an item for 2" in out
    assert "juan failed with the offer of 3" in out


def test_run_suite_rejects_bad_sizes():
    with pytest.raises(ValueError):
        run_suite(-1, 0, 1)


def test_main_rejects_non_positive_option():
    with pytest.raises(SystemExit):
        main(["--parallel", "0"])


def test_main_rejects_non_numeric_option():
    with pytest.raises(SystemExit):
        main(["--rounds", "many"])