from rentledger.models import format_vnd, parse_vnd


class TestFormatVnd:
    def test_thousands(self):
        assert format_vnd(2_850_000) == "2.850.000 ₫"

    def test_zero(self):
        assert format_vnd(0) == "0 ₫"

    def test_negative(self):
        assert format_vnd(-175_000) == "-175.000 ₫"


class TestParseVnd:
    def test_plain(self):
        assert parse_vnd("2850000") == 2_850_000

    def test_dotted(self):
        assert parse_vnd("2.850.000") == 2_850_000

    def test_commas_and_symbol(self):
        assert parse_vnd("2,850,000 ₫") == 2_850_000

    def test_empty(self):
        assert parse_vnd("  ") is None

    def test_invalid(self):
        assert parse_vnd("abc") is None
