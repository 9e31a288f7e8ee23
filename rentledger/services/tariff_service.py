from __future__ import annotations

import logging

from rentledger.models.tariff import TariffSettings
from rentledger.repositories.base import TariffRepository
from rentledger.settings import settings

logger = logging.getLogger(__name__)


class TariffService:
    def __init__(self, repo: TariffRepository) -> None:
        self.repo = repo

    def get_settings(self) -> TariffSettings:
        stored = self.repo.get()
        if stored is not None:
            return stored
        logger.debug("No tariff saved yet, using defaults")
        return TariffSettings(
            electricity_rate=settings.default_electricity_rate,
            water_rate=settings.default_water_rate,
            internet_fee=settings.default_internet_fee,
            trash_fee=settings.default_trash_fee,
        )

    def update_settings(self, tariff: TariffSettings) -> TariffSettings:
        result = self.repo.save(tariff)
        logger.info(
            "Tariff updated: electricity=%d water=%d internet=%d trash=%d other=%d",
            result.electricity_rate,
            result.water_rate,
            result.internet_fee,
            result.trash_fee,
            result.other_fees,
        )
        return result
