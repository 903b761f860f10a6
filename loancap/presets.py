
DISCLAIMER = (
    "Ce simulateur applique un taux d'endettement maximal d'un tiers des revenus nets mensuels. "
    "Les montants sont indicatifs : ils n'incluent ni assurance emprunteur, ni frais de dossier, "
    "ni garantie, et ne constituent pas une offre de prêt."
)

# Lending policy: the installment may use at most one third of net income
DEBT_TO_INCOME_DENOMINATOR = 3
MAX_LOAN_DURATION_YEARS = 25

# Form defaults
DEFAULT_RATE = 3.8
DEFAULT_INCOME = 2600.0
DEFAULT_DURATION_YEARS = 20
DURATION_MARKS = [5, 10, 15, 20, 25]

RATE_MODES = ["single", "multi"]

# Display
CURRENCY_SYMBOL = "€"
DEFAULT_LANGUAGE = "fr"
LANGUAGES = {"fr": "Français", "en": "English"}
