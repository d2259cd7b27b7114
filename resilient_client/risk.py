"""
resilient_client.risk - Risk tiers per vital sign and per-patient totals.

Tier boundaries
---------------
Blood pressure (0-3): normal < 120/80, elevated 120-129 systolic with
    diastolic < 80, stage 1 when systolic < 140 or diastolic < 90,
    stage 2 otherwise.
Temperature (0-2): normal < 99.5, low fever < 101.0, high fever above.
Age (0-2): under 40, 40-65, over 65.

The per-patient total is the plain sum of the three tiers (0-7).
"""

from typing import Iterable, Optional

import pandas as pd

from resilient_client.validation import (
    validate_age,
    validate_blood_pressure,
    validate_temperature,
)

PATIENT_ID_FIELD = "patient_id"
BLOOD_PRESSURE_FIELD = "blood_pressure"
TEMPERATURE_FIELD = "temperature"
AGE_FIELD = "age"

HIGH_RISK_MIN_TOTAL = 4
FEVER_MIN_TIER = 1

ASSESSMENT_COLUMNS = [
    PATIENT_ID_FIELD,
    "systolic",
    "diastolic",
    TEMPERATURE_FIELD,
    AGE_FIELD,
    "blood_pressure_risk",
    "temperature_risk",
    "age_risk",
    "total_risk",
    "data_quality_issue",
]


def blood_pressure_risk(systolic: Optional[int], diastolic: Optional[int]) -> int:
    if systolic is None or diastolic is None:
        return 0
    if systolic < 120 and diastolic < 80:
        return 0
    if systolic < 130 and diastolic < 80:
        return 1
    if systolic < 140 or diastolic < 90:
        return 2
    return 3


def temperature_risk(temperature: Optional[float]) -> int:
    if temperature is None:
        return 0
    if temperature < 99.5:
        return 0
    if temperature < 101.0:
        return 1
    return 2


def age_risk(age: Optional[int]) -> int:
    if age is None:
        return 0
    if age < 40:
        return 0
    if age <= 65:
        return 1
    return 2


def assess_patient(patient: dict) -> dict:
    """
    Validate a raw patient record and score it.

    Missing or malformed fields score 0 and flag ``data_quality_issue``.
    """
    bp = validate_blood_pressure(patient.get(BLOOD_PRESSURE_FIELD))
    temp = validate_temperature(patient.get(TEMPERATURE_FIELD))
    age = validate_age(patient.get(AGE_FIELD))

    bp_tier = blood_pressure_risk(bp["systolic"], bp["diastolic"])
    temp_tier = temperature_risk(temp["value"])
    age_tier = age_risk(age["value"])

    return {
        PATIENT_ID_FIELD: patient.get(PATIENT_ID_FIELD),
        "systolic": bp["systolic"],
        "diastolic": bp["diastolic"],
        TEMPERATURE_FIELD: temp["value"],
        AGE_FIELD: age["value"],
        "blood_pressure_risk": bp_tier,
        "temperature_risk": temp_tier,
        "age_risk": age_tier,
        "total_risk": bp_tier + temp_tier + age_tier,
        "data_quality_issue": not (bp["is_valid"] and temp["is_valid"] and age["is_valid"]),
    }


def total_risk(patient: dict) -> int:
    """Sum of the blood-pressure, temperature and age tiers."""
    return assess_patient(patient)["total_risk"]


def assess_patients(records: Iterable[dict]) -> pd.DataFrame:
    """One row per record, in input order, with ``ASSESSMENT_COLUMNS``."""
    rows = [assess_patient(record) for record in records]
    return pd.DataFrame(rows, columns=ASSESSMENT_COLUMNS)


def summarize_alerts(frame: pd.DataFrame) -> dict:
    """Patient ids grouped by alert list."""
    high_risk = frame[frame["total_risk"] >= HIGH_RISK_MIN_TOTAL]
    fever = frame[frame["temperature_risk"] >= FEVER_MIN_TIER]
    quality = frame[frame["data_quality_issue"].astype(bool)]
    return {
        "high_risk_patients": high_risk[PATIENT_ID_FIELD].tolist(),
        "fever_patients": fever[PATIENT_ID_FIELD].tolist(),
        "data_quality_issues": quality[PATIENT_ID_FIELD].tolist(),
    }
