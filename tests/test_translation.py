from core.i18n import load_translations, t


def test_french_is_default():
    assert t("form.monthly_income") == "Revenu mensuel"
    assert t("col.CapitalAfter", "fr") == "Capital restant dû"


def test_english_translation_loaded():
    assert t("form.monthly_income", "en") == "Monthly income"
    assert t("UnknownKey", "en") == "UnknownKey"


def test_unknown_language_uses_french():
    assert t("form.monthly_income", "xx") == "Revenu mensuel"


def test_placeholders_are_filled():
    assert t("pdf.duration_value", "fr", years=20) == "20 ans"
    assert t("error.duration_years.range", "en", max_years=25).endswith("25 years")


def test_languages_share_keys():
    assert set(load_translations("fr")) == set(load_translations("en"))
