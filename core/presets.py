"""Closed enumerations, display labels and creation defaults."""

# Text sentinel for enumerations and free-text fields. Distinct from the
# numeric ``core.unknown.UNKNOWN``.
UNKNOWN_LABEL = "unknown"

CASE_STATUSES = ("intake", "submitted", "approved", "denied", "withdrawn", "stalled")
USER_ROLES = ("broker", "mlo", "assistant")

DEAL_PURPOSE_OPTIONS = {"purchase": "Purchase", "refi": "Refi", "cash_out": "Cash Out"}
OCCUPANCY_OPTIONS = {"primary": "Primary", "second": "Second", "investment": "Investment"}
PROPERTY_TYPE_OPTIONS = {
    "sfr": "SFR",
    "condo": "Condo",
    "townhome": "Townhome",
    "2-4_unit": "2-4 Unit",
    "manufactured": "Manufactured",
    "other": "Other",
}
CITIZENSHIP_OPTIONS = {
    "us_citizen": "US Citizen",
    "permanent_resident": "Permanent Resident",
    "non_permanent_resident": "Non-permanent Resident",
    "unknown": "Unknown",
}
INCOME_TYPE_OPTIONS = {
    "w2": "W2",
    "1099": "1099",
    "self_employed": "Self-employed",
    "retired": "Retired",
    "mixed": "Mixed",
    "unknown": "Unknown",
}
GIFT_FUNDS_OPTIONS = {"unknown": "Unknown", "true": "Yes", "false": "No"}
RISK_SEVERITIES = ("low", "medium", "high")
RETRIEVER_BACKENDS = ("pinecone", "opensearch")
GUIDELINE_QUERY_BACKENDS = ("auto", "pinecone", "opensearch")
AUS_OPTIONS = {
    "approve": "Approve",
    "eligible": "Eligible",
    "refer": "Refer",
    "ineligible": "Ineligible",
    "unknown": "Unknown",
}
DECISION_OPTIONS = {
    "approved": "Approved",
    "denied": "Denied",
    "pending": "Pending",
    "unknown": "Unknown",
}

DEAL_DEFAULTS = {
    "purpose": "purchase",
    "occupancy": "primary",
    "property_type": "sfr",
    "state": "CA",
    "target_close_days": 30,
}
MAX_TARGET_CLOSE_DAYS = 365

DISCLAIMER = (
    "Scenario summary for discussion only. Ratios, risk flags and guideline citations are "
    "computed by the case service from the information entered; unknown values are shown as "
    "Unknown and are not treated as zero. AUS findings, lender overlays and underwriter "
    "discretion prevail."
)
