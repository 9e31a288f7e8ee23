from unittest.mock import MagicMock, patch

from rentledger.models.tariff import TariffSettings
from rentledger.services.tariff_service import TariffService


class TestTariffService:
    def setup_method(self):
        self.mock_repo = MagicMock()
        self.service = TariffService(self.mock_repo)

    def test_get_settings_stored(self, tariff):
        self.mock_repo.get.return_value = tariff
        assert self.service.get_settings() is tariff

    def test_get_settings_defaults(self):
        self.mock_repo.get.return_value = None
        with patch("rentledger.services.tariff_service.settings") as mock_settings:
            mock_settings.default_electricity_rate = 4_000
            mock_settings.default_water_rate = 20_000
            mock_settings.default_internet_fee = 50_000
            mock_settings.default_trash_fee = 0
            result = self.service.get_settings()
        assert result == TariffSettings(electricity_rate=4_000, water_rate=20_000, internet_fee=50_000)

    def test_update_settings(self, tariff):
        self.mock_repo.save.return_value = tariff
        assert self.service.update_settings(tariff) is tariff
        self.mock_repo.save.assert_called_once_with(tariff)
