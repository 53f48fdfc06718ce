"""
First-boot data for the master directory.

Creates the bootstrap administrator and the default currency set. Both
steps are skipped when the data is already there, so running this on
every startup is harmless.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.permissions import Roles
from app.models.currency import Currency
from app.repositories.currency_repository import CurrencyRepository
from app.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

# code, Arabic name, English name, symbol
DEFAULT_CURRENCIES = [
    ("SAR", "ريال سعودي", "Saudi Riyal", "ر.س"),
    ("USD", "دولار أمريكي", "US Dollar", "$"),
    ("EUR", "يورو", "Euro", "€"),
    ("AED", "درهم إماراتي", "UAE Dirham", "د.إ"),
    ("KWD", "دينار كويتي", "Kuwaiti Dinar", "د.ك"),
    ("BHD", "دينار بحريني", "Bahraini Dinar", "د.ب"),
    ("OMR", "ريال عماني", "Omani Rial", "ر.ع"),
    ("JOD", "دينار أردني", "Jordanian Dinar", "د.أ"),
    ("EGP", "جنيه مصري", "Egyptian Pound", "ج.م"),
]


async def seed_master_directory(db: AsyncSession, settings: Settings) -> None:
    """Seed admin + currencies. The caller commits."""
    users = UserRepository(db)
    if not await users.get_by_username(settings.DEFAULT_ADMIN_USERNAME):
        await users.create(
            username=settings.DEFAULT_ADMIN_USERNAME,
            password=settings.DEFAULT_ADMIN_PASSWORD,
            company_id=None,
            role=Roles.ADMIN,
        )
        logger.info("Seeded bootstrap admin account %r", settings.DEFAULT_ADMIN_USERNAME)

    currencies = CurrencyRepository(db)
    if await currencies.count() == 0:
        for code, name_ar, name_en, symbol in DEFAULT_CURRENCIES:
            db.add(Currency(code=code, name_ar=name_ar, name_en=name_en, symbol=symbol))
        await db.flush()
        logger.info("Seeded %d default currencies", len(DEFAULT_CURRENCIES))
