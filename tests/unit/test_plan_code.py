# Path: tests/unit/test_plan_code.py
"""
Unit Tests for Plan Code Extraction

Tests the plan code extractor including:
- Token between the first and third underscore
- Failure kinds for unusable URLs
"""

import pytest

from ppo_index.errors import PlanCodeError, PlanCodeFailure
from ppo_index.process.plan_code import extract_plan_code


class TestExtractPlanCode:
    """Successful extraction."""

    def test_typical_rate_file_name(self):
        """The region code sits between the first and third underscore."""
        url = 'https://mrf.example.com/2026-10_302_42B0_in-network-rates_1_of_2.json.gz'
        assert extract_plan_code(url) == '302_42B0'

    def test_minimal_three_separators(self):
        assert extract_plan_code('https://h/p/A_B_C_D') == 'B_C'

    def test_only_final_segment_is_used(self):
        """Underscores in directories and the host are ignored."""
        url = 'https://my_host.example.com/dir_a_b_c/x_254_39B0_rates.json'
        assert extract_plan_code(url) == '254_39B0'

    def test_query_string_is_ignored(self):
        url = 'https://h/2026_800_72A0_file.json.gz?sig=a_b_c_d'
        assert extract_plan_code(url) == '800_72A0'

    def test_trailing_slash_uses_previous_segment(self):
        assert extract_plan_code('https://h/x_301_71A0_y/') == '301_71A0'

    def test_percent_encoding_is_decoded(self):
        assert extract_plan_code('https://h/x%5F301_71A0_y.json') == '301_71A0'

    def test_adjacent_separators(self):
        """Empty sub-fields are kept as-is."""
        assert extract_plan_code('https://h/a___b') == '_'


class TestExtractPlanCodeFailures:
    """Failure kinds."""

    @pytest.mark.parametrize('url', [
        'https://h',
        'https://h/',
        'https://h///',
        '',
    ])
    def test_no_filename(self, url):
        with pytest.raises(PlanCodeError) as exc_info:
            extract_plan_code(url)
        assert exc_info.value.kind == PlanCodeFailure.NO_FILENAME

    @pytest.mark.parametrize('filename', [
        'rates.json.gz',
        'only_one.json',
        'FILE_AB12CD_2024.json',
        'noseparators.json',
    ])
    def test_insufficient_separators(self, filename):
        """Fewer than three underscores cannot bound a plan code."""
        with pytest.raises(PlanCodeError) as exc_info:
            extract_plan_code(f'https://h/{filename}')
        assert exc_info.value.kind == PlanCodeFailure.INSUFFICIENT_SEPARATORS

    def test_invalid_url(self):
        with pytest.raises(PlanCodeError) as exc_info:
            extract_plan_code('http://[::1/x_a_b_c')
        assert exc_info.value.kind == PlanCodeFailure.INVALID_URL

    def test_error_keeps_url(self):
        url = 'https://h/rates.json'
        with pytest.raises(PlanCodeError) as exc_info:
            extract_plan_code(url)
        assert exc_info.value.url == url
        assert str(exc_info.value.kind) == 'InsufficientSeparators'

    def test_three_separator_form(self):
        assert extract_plan_code('https://host/path/FILE_AB12CD_2024_x.json') == 'AB12CD_2024'
