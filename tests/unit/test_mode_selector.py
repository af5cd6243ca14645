"""Tests for ono_selfie.prompting.mode_selector."""

import pytest

from ono_selfie.core.errors import InvalidRequestError
from ono_selfie.prompting.mode_selector import (
    DIRECT_KEYWORDS,
    MIRROR_KEYWORDS,
    detect_mode,
    select_mode,
)


class TestDetectMode:
    """Keyword classification in auto mode."""

    @pytest.mark.parametrize("keyword", MIRROR_KEYWORDS)
    def test_mirror_keywords_select_mirror(self, keyword):
        assert detect_mode(f"a photo {keyword} today") == "mirror"

    @pytest.mark.parametrize("keyword", DIRECT_KEYWORDS)
    def test_direct_keywords_select_direct(self, keyword):
        assert detect_mode(f"at the {keyword}") == "direct"

    def test_matching_is_case_insensitive(self):
        assert detect_mode("Sunset at the BEACH") == "direct"
        assert detect_mode("WEARING a scarf") == "mirror"

    def test_both_keyword_sets_resolve_to_mirror(self):
        assert detect_mode("wearing a sundress at the beach") == "mirror"

    def test_no_keywords_defaults_to_mirror(self):
        assert detect_mode("holding a cat") == "mirror"

    def test_empty_text_defaults_to_mirror(self):
        assert detect_mode("") == "mirror"

    def test_reflection_selects_mirror(self):
        assert detect_mode("her reflection in a shop window") == "mirror"


class TestSelectMode:
    """Explicit modes bypass detection."""

    def test_explicit_direct_wins_over_keywords(self):
        assert select_mode("wearing a santa hat", "direct") == "direct"

    def test_explicit_mode_is_case_insensitive(self):
        assert select_mode("at the park", "MIRROR") == "mirror"

    def test_auto_runs_detection(self):
        assert select_mode("a cozy cafe", "auto") == "direct"

    def test_none_is_treated_as_auto(self):
        assert select_mode("a cozy cafe", None) == "direct"

    def test_unknown_mode_raises(self):
        with pytest.raises(InvalidRequestError):
            select_mode("a cozy cafe", "sideways")
