import logging
import os
from unittest.mock import patch

import pytest

from llm_catalog.recommendations.config import RecommendationConfig, load_input_token_share


class TestInputTokenShare:
    def test_unset_uses_default(self):
        with patch.dict(os.environ, clear=True):
            assert load_input_token_share() == 0.4

    def test_valid_override(self):
        with patch.dict(os.environ, {"RECOMMENDER_INPUT_TOKEN_SHARE": "0.25"}):
            assert load_input_token_share() == 0.25

    def test_non_numeric_falls_back_with_warning(self, caplog):
        with patch.dict(os.environ, {"RECOMMENDER_INPUT_TOKEN_SHARE": "abc"}):
            with caplog.at_level(logging.WARNING):
                assert load_input_token_share() == 0.4
        assert "RECOMMENDER_INPUT_TOKEN_SHARE" in caplog.text

    @pytest.mark.parametrize("raw", ["1.5", "-0.2", "nan"])
    def test_out_of_range_falls_back_with_warning(self, raw, caplog):
        with patch.dict(os.environ, {"RECOMMENDER_INPUT_TOKEN_SHARE": raw}):
            with caplog.at_level(logging.WARNING):
                assert load_input_token_share() == 0.4
        assert "outside [0, 1]" in caplog.text

    @pytest.mark.parametrize("raw", ["0", "1"])
    def test_bounds_are_inclusive(self, raw):
        with patch.dict(os.environ, {"RECOMMENDER_INPUT_TOKEN_SHARE": raw}):
            assert load_input_token_share() == float(raw)


def test_output_share_is_complement():
    config = RecommendationConfig(input_token_share=0.3)
    assert config.output_token_share == pytest.approx(0.7)
