"""ApiSettingRepository: lookup of provider credentials."""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import db_logger, get_logger
from app.models.api_setting import ApiSetting

logger = get_logger(__name__)


class ApiSettingRepository:
    """Repository for ApiSetting lookups."""

    TABLE_NAME = "api_settings"

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_active_value(self, setting_name: str) -> str | None:
        """Return the value of an active setting, or None if missing or inactive."""
        try:
            result = await self.session.execute(
                select(ApiSetting.setting_value).where(
                    ApiSetting.setting_name == setting_name,
                    ApiSetting.is_active.is_(True),
                )
            )
            value = result.scalar_one_or_none()

        except SQLAlchemyError as e:
            db_logger.transaction_failure(
                e,
                table=self.TABLE_NAME,
                context=f"Fetching setting {setting_name}",
            )
            raise

        # Only the presence of the value is logged
        logger.debug(
            "API setting lookup",
            extra={"setting_name": setting_name, "found": bool(value)},
        )
        return value or None
