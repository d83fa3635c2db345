import logging

import yaml

from .ScoringObject import L1_NORM, L2_NORM, create_scoring_object

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    "Scoring.Type": L1_NORM,
    "Scoring.L2.Workers": 4,
    "Scoring.L2.MinParallelSize": 1024,
}


def _check_int(settings, key, minimum):
    value = settings[key]
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ValueError(f"Setting {key} must be an integer >= {minimum}, got {value!r}")


def validate_settings(fsSettings):
    """Fill in defaults and check the scoring settings. Returns a new dict."""
    if not isinstance(fsSettings, dict):
        raise ValueError(f"Settings must be a mapping, got {type(fsSettings).__name__}")

    unknown = sorted(str(key) for key in fsSettings if key not in DEFAULT_SETTINGS)
    if unknown:
        raise ValueError(f"Unknown settings: {', '.join(unknown)}. Known settings: {', '.join(DEFAULT_SETTINGS)}")

    settings = dict(DEFAULT_SETTINGS)
    settings.update(fsSettings)

    _check_int(settings, "Scoring.L2.Workers", 1)
    _check_int(settings, "Scoring.L2.MinParallelSize", 0)
    return settings


def load_settings(strSettingsFile):
    """
    Reads the scoring settings from a YAML file.
    :param strSettingsFile: Path to the settings file.
    :return: Settings dict with defaults filled in.
    """
    with open(strSettingsFile, 'r') as f:
        fsSettings = yaml.load(f, Loader=yaml.SafeLoader)

    if fsSettings is None:
        fsSettings = {}

    settings = validate_settings(fsSettings)
    logger.info("Loaded scoring settings from %s", strSettingsFile)
    return settings


def scoring_from_settings(settings):
    """Builds the scoring object described by a settings dict or settings file path."""
    if isinstance(settings, dict):
        settings = validate_settings(settings)
    else:
        settings = load_settings(settings)

    scoring = settings["Scoring.Type"]
    options = {}
    if create_scoring_object(scoring).scoring_type == L2_NORM:
        options = {
            "workers": settings["Scoring.L2.Workers"],
            "min_parallel_size": settings["Scoring.L2.MinParallelSize"],
        }

    scoring_object = create_scoring_object(scoring, **options)
    logger.info("Using %r for BoW scoring", scoring_object)
    return scoring_object
