"""Settings for the campaign analytics library.

Values are read from environment variables prefixed with
``CAMPAIGN_ANALYTICS_`` (or a local ``.env`` file) by pydantic-settings.
The pure functions in :mod:`campaign_analytics.data_pipeline` keep their own
literal defaults; the classes in :mod:`campaign_analytics.models` read their
thresholds and weights from here.

Usage:
    from campaign_analytics.config import get_settings

    settings = get_settings()
    horizon = settings.recency_horizon_days
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Tunable parameters for scoring and detection.

    Attributes:
        feature_window: Default trailing window of the anomaly detector.
        outlier_iqr_multiplier: IQR multiple defining the outlier fences.
        recency_horizon_days: Age in days at which recency drops to zero.
        completeness_weight: Weight of completeness in the quality score.
        consistency_weight: Weight of consistency in the quality score.
        recency_weight: Weight of recency in the quality score.
        anomaly_z_threshold: Absolute z-score above which a point is anomalous.
    """

    model_config = SettingsConfigDict(
        env_prefix='CAMPAIGN_ANALYTICS_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=False,
    )

    feature_window: int = Field(7, ge=1)

    outlier_iqr_multiplier: float = Field(1.5, ge=0.0)

    # Data-quality score. The three weights are expected to sum to 1.
    recency_horizon_days: float = Field(30.0, gt=0.0)
    completeness_weight: float = 0.4
    consistency_weight: float = 0.4
    recency_weight: float = 0.2

    anomaly_z_threshold: float = Field(2.0, gt=0.0)


@lru_cache()
def get_settings() -> Settings:
    """Return the cached settings instance.

    Call ``get_settings.cache_clear()`` after changing the environment in tests.
    """
    return Settings()
