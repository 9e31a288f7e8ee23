from unittest.mock import patch

from freezegun import freeze_time

from rentledger.cli.prompts import ask_amount, ask_period, ask_reading
from rentledger.models.period import Period


class TestAskPeriod:
    @freeze_time("2025-03-15 05:00:00")
    @patch("rentledger.cli.prompts.questionary")
    def test_default_is_current_period(self, mock_q):
        mock_q.text.return_value.ask.return_value = "03/2025"
        assert ask_period() == Period(month=3, year=2025)
        assert mock_q.text.call_args.kwargs["default"] == "03/2025"

    @patch("rentledger.cli.prompts.questionary")
    def test_retries_on_invalid(self, mock_q):
        mock_q.text.return_value.ask.side_effect = ["2025", "13/2025", "1/2026"]
        assert ask_period() == Period(month=1, year=2026)

    @patch("rentledger.cli.prompts.questionary")
    def test_cancel(self, mock_q):
        mock_q.text.return_value.ask.return_value = None
        assert ask_period() is None


class TestAskAmount:
    @patch("rentledger.cli.prompts.questionary")
    def test_dotted_amount(self, mock_q):
        mock_q.text.return_value.ask.return_value = "2.500.000"
        assert ask_amount("Rent:") == 2_500_000

    @patch("rentledger.cli.prompts.questionary")
    def test_zero_refused_when_not_allowed(self, mock_q):
        mock_q.text.return_value.ask.side_effect = ["0", "abc", "100"]
        assert ask_amount("Rent:", allow_zero=False) == 100


class TestAskReading:
    @patch("rentledger.cli.prompts.questionary")
    def test_below_minimum_retries(self, mock_q):
        mock_q.text.return_value.ask.side_effect = ["90", "x", "150"]
        assert ask_reading("Electricity:", 100) == 150

    @patch("rentledger.cli.prompts.questionary")
    def test_cancel(self, mock_q):
        mock_q.text.return_value.ask.return_value = None
        assert ask_reading("Water:", 20) is None
