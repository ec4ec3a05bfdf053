import pytest
from django.test import override_settings

from django_symposium.settings import ListingConfig, SymposiumConfig, get_config


def test_get_config_defaults() -> None:
    with override_settings(DJANGO_SYMPOSIUM={}):
        config = get_config()

    assert config == SymposiumConfig()
    assert config.date_format == "M j Y"
    assert config.listing == ListingConfig(default_filter="approved", default_sort="cfp_closing_next")
    assert config.listing.paginate_by is None


def test_get_config_reads_nested_listing_section() -> None:
    with override_settings(
        DJANGO_SYMPOSIUM={"date_format": "Y-m-d", "listing": {"default_filter": "all", "paginate_by": 25}}
    ):
        config = get_config()

    assert config.date_format == "Y-m-d"
    assert config.listing.default_filter == "all"
    assert config.listing.default_sort == "cfp_closing_next"
    assert config.listing.paginate_by == 25


def test_get_config_rejects_non_mapping_root() -> None:
    with override_settings(DJANGO_SYMPOSIUM=["bad"]):
        with pytest.raises(TypeError, match="must be a mapping"):
            get_config()


def test_get_config_rejects_non_mapping_listing_section() -> None:
    with override_settings(DJANGO_SYMPOSIUM={"listing": ["bad"]}):
        with pytest.raises(TypeError, match=r"DJANGO_SYMPOSIUM\['listing'\] must be a mapping"):
            get_config()


def test_get_config_rejects_unknown_keys() -> None:
    with override_settings(DJANGO_SYMPOSIUM={"currency": "USD"}):
        with pytest.raises(TypeError):
            get_config()


def test_get_config_validates_primitive_values() -> None:
    with override_settings(DJANGO_SYMPOSIUM={"date_format": ""}):
        with pytest.raises(ValueError, match="date_format"):
            get_config()

    with override_settings(DJANGO_SYMPOSIUM={"listing": {"default_filter": "everything"}}):
        with pytest.raises(ValueError, match="default_filter.*must be one of"):
            get_config()

    with override_settings(DJANGO_SYMPOSIUM={"listing": {"default_sort": "random"}}):
        with pytest.raises(ValueError, match="default_sort.*must be one of"):
            get_config()

    with override_settings(DJANGO_SYMPOSIUM={"listing": {"paginate_by": 0}}):
        with pytest.raises(ValueError, match="positive integer"):
            get_config()

    with override_settings(DJANGO_SYMPOSIUM={"listing": {"paginate_by": True}}):
        with pytest.raises(ValueError, match="positive integer"):
            get_config()


def test_get_config_cache_clears_on_setting_changed() -> None:
    with override_settings(DJANGO_SYMPOSIUM={"date_format": "Y"}):
        assert get_config().date_format == "Y"

    with override_settings(DJANGO_SYMPOSIUM={"date_format": "N j, Y"}):
        assert get_config().date_format == "N j, Y"


def test_get_config_is_cached() -> None:
    with override_settings(DJANGO_SYMPOSIUM={}):
        assert get_config() is get_config()
