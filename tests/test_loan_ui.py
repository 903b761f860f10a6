from streamlit.testing.v1 import AppTest

from core.utils import format_currency
from loancap.calculators import principal_multi_rate, principal_single_rate


def loan_app():
    import app

    app.main()


def _metric(at, label):
    return next(m.value for m in at.metric if m.label == label)


def test_default_inputs_show_capacity():
    at = AppTest.from_function(loan_app)
    at.run()
    assert not at.exception
    assert at.title[0].value == "Calculer votre capacité d'emprunt"
    assert _metric(at, "Mensualité maximale") == format_currency(2600 / 3)
    expected = principal_single_rate(2600 / 3, 3.8, 240)
    assert _metric(at, "Capacité d'emprunt maximale") == format_currency(expected)


def test_rate_input_accepts_french_decimal():
    at = AppTest.from_function(loan_app)
    at.run()
    at.text_input(key="annual_rate").set_value("2,5").run()
    expected = principal_single_rate(2600 / 3, 2.5, 240)
    assert _metric(at, "Capacité d'emprunt maximale") == format_currency(expected)


def test_invalid_income_hides_results():
    at = AppTest.from_function(loan_app)
    at.run()
    at.text_input(key="monthly_income").set_value("abc").run()
    assert any(e.value == "Le revenu mensuel doit être un nombre" for e in at.error)
    assert len(at.metric) == 0


def test_multi_rate_periods_autofill_last():
    at = AppTest.from_function(loan_app)
    at.session_state["rate_mode"] = "multi"
    at.session_state["rate_periods"] = [{"years": 10, "rate": 2.0}, {"years": 1, "rate": 4.0}]
    at.run()
    assert not at.exception
    assert at.session_state["rate_periods"] == [{"years": 10, "rate": 2.0}, {"years": 10, "rate": 4.0}]
    expected = principal_multi_rate(
        2600 / 3, [{"years": 10, "rate": 2.0}, {"years": 10, "rate": 4.0}], 240
    )
    assert _metric(at, "Capacité d'emprunt maximale") == format_currency(expected)
    assert any(c.value == "Périodes utilisées :" for c in at.caption)


def test_english_labels():
    at = AppTest.from_function(loan_app)
    at.session_state["ui_prefs"] = {"language": "en"}
    at.run()
    assert at.title[0].value == "Calculate your borrowing capacity"
    assert _metric(at, "Maximum monthly installment") == format_currency(2600 / 3)


def test_rate_survives_mode_toggle():
    at = AppTest.from_function(loan_app)
    at.run()
    at.text_input(key="annual_rate").set_value("2,5").run()
    at.radio(key="rate_mode").set_value("multi").run()
    at.radio(key="rate_mode").set_value("single").run()
    assert not at.exception
    assert at.text_input(key="annual_rate").value == "2,5"
    expected = principal_single_rate(2600 / 3, 2.5, 240)
    assert _metric(at, "Capacité d'emprunt maximale") == format_currency(expected)


def test_editable_period_years_start_at_one():
    at = AppTest.from_function(loan_app)
    at.session_state["rate_mode"] = "multi"
    at.session_state["rate_periods"] = [{"years": 0, "rate": 2.0}, {"years": 20, "rate": 4.0}]
    at.run()
    assert not at.exception
    assert at.number_input(key="period_0_years").min == 1
    assert at.number_input(key="period_0_years").value == 1
    assert at.number_input(key="period_1_years").value == 19
