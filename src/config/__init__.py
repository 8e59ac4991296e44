"""Configuration module for the Pehchan recognition engine.

Available Configurations:
- RecognitionWeightConfig: Role weights, type multipliers, level thresholds
  and decay parameters for recognition scoring
"""

from src.config.recognition_config import (
    DEFAULT_RECOGNITION_WEIGHT_CONFIG,
    TEST_RECOGNITION_WEIGHT_CONFIG,
    LevelThreshold,
    RecognitionWeightConfig,
)

__all__ = [
    "LevelThreshold",
    "RecognitionWeightConfig",
    "DEFAULT_RECOGNITION_WEIGHT_CONFIG",
    "TEST_RECOGNITION_WEIGHT_CONFIG",
]
