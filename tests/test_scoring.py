import pytest

from scoring import STAR_THRESHOLDS, compute_stars, evaluate, is_correct


@pytest.mark.parametrize("a", [-7, 0, 1, 15, 9999])
def test_exact_match_is_correct(a):
    assert is_correct(a, a) is True
    assert is_correct(a + 1, a) is False
    assert is_correct(a - 1, a) is False


@pytest.mark.parametrize(
    "seconds, stars",
    [(0, 3), (59, 3), (60, 2), (61, 2), (119, 2), (120, 1), (121, 1), (600, 1)],
)
def test_medium_star_bands(seconds, stars):
    assert compute_stars(True, seconds, "medium") == stars


@pytest.mark.parametrize("difficulty", ["easy", "medium", "hard"])
def test_band_edges_for_each_difficulty(difficulty):
    three, two = STAR_THRESHOLDS[difficulty]
    assert compute_stars(True, three - 1, difficulty) == 3
    assert compute_stars(True, three, difficulty) == 2
    assert compute_stars(True, two - 1, difficulty) == 2
    assert compute_stars(True, two, difficulty) == 1


def test_no_time_means_no_stars():
    assert compute_stars(True, None, "medium") == 0


def test_wrong_answer_means_no_stars():
    assert compute_stars(False, 5, "easy") == 0


@pytest.mark.parametrize("difficulty", [None, "", "impossible"])
def test_unknown_difficulty_uses_medium(difficulty):
    assert compute_stars(True, 59, difficulty) == 3
    assert compute_stars(True, 61, difficulty) == 2


def test_evaluate_combines_both():
    assert evaluate(15, 15, 20, "easy") == (True, 3)
    assert evaluate(14, 15, 20, "easy") == (False, 0)
    assert evaluate(15, 15).stars == 0
