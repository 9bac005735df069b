"""
Constants for Survey Analysis

Label, taxonomy and weight tables used throughout the analyzer. Tables are
keyed by canonical code strings (the enum values) so this module depends on
nothing else in the package.

Constant Categories:
    *_LABELS          → Human-readable labels per coded value
    *_ALIASES         → Legacy (Spanish questionnaire) codes mapped to canonical codes
    RISK_WEIGHTS      → Point contributions for the risk index
    DIAGNOSIS_*       → Default diagnosis categories and keyword table
    ICONS             → Icon references consumed by the presentation layer
    SENTIMENT_*       → Keyword lexicon for comment sentiment
"""

from typing import Dict, Tuple


# =============================================================================
# STAGE 1: LABEL TABLES
# =============================================================================

SYMPTOM_LABELS: Dict[str, str] = {
    "abdominal_pain": "Abdominal pain",
    "visible_lump": "Visible lump",
    "jaundice": "Jaundice",
    "limited_movement": "Limited movement",
    "nausea": "Nausea",
    "post_meal_pain": "Pain after meals",
    "heaviness": "Heaviness",
    "bloating": "Bloating",
    "exertion_pain": "Pain on exertion",
    "fever": "Fever",
}

SEVERITY_LABELS: Dict[str, str] = {
    "mild": "Mild",
    "moderate": "Moderate",
    "severe": "Severe",
    "unknown": "Not specified",
}

DURATION_LABELS: Dict[str, str] = {
    "less_than_1_month": "< 1 month",
    "1_3_months": "1-3 months",
    "3_6_months": "3-6 months",
    "6_12_months": "6-12 months",
    "more_than_1_year": "> 1 year",
    "unknown": "Not specified",
}

LIMITATION_LABELS: Dict[str, str] = {
    "none": "None",
    "mild": "Mild",
    "moderate": "Moderate",
    "severe": "Severe",
    "unknown": "Not specified",
}

TIMEFRAME_LABELS: Dict[str, str] = {
    "urgent": "As soon as possible",
    "30_days": "Within the next month",
    "90_days": "Within 2-3 months",
    "no_rush": "No particular rush",
    "unknown": "Not specified",
}

INSURANCE_LABELS: Dict[str, str] = {
    "none": "No insurance",
    "imss": "IMSS",
    "issste": "ISSSTE",
    "private": "Private insurance",
    "other": "Other insurance",
    "unknown": "Not specified",
}

CONCERN_LABELS: Dict[str, str] = {
    "total_cost": "Total cost of the procedure",
    "pain_management": "Pain management",
    "complications": "Risks or complications",
    "anesthesia": "Anesthesia and its effects",
    "recovery_time": "Recovery time",
    "missing_work": "Time off work",
    "no_home_support": "No support at home during recovery",
    "unsure_necessity": "Doubts about whether surgery is necessary",
    "procedure_fear": "Fear of the procedure",
}

COMORBIDITY_LABELS: Dict[str, str] = {
    "hypertension": "Hypertension",
    "diabetes": "Diabetes",
    "obesity": "Obesity",
    "heart_disease": "Heart disease",
    "lung_disease": "Lung disease",
    "thyroid_disease": "Thyroid disease",
}


# =============================================================================
# STAGE 2: LEGACY ALIAS TABLES
# =============================================================================
# Keys are normalized (lowercase, spaces and hyphens as underscores).

SYMPTOM_ALIASES: Dict[str, str] = {
    "dolor_abdominal": "abdominal_pain",
    "bulto_visible": "visible_lump",
    "ictericia": "jaundice",
    "limitacion_movimiento": "limited_movement",
    "nauseas": "nausea",
    "dolor_comidas": "post_meal_pain",
    "pesadez": "heaviness",
    "distension": "bloating",
    "dolor_esfuerzos": "exertion_pain",
    "fiebre": "fever",
    # Labels used by the questionnaire form
    "dolor_en_la_zona_abdominal": "abdominal_pain",
    "dolor_después_de_comer": "post_meal_pain",
    "dolor_que_aumenta_con_esfuerzos": "exertion_pain",
    "dolor_con_esfuerzo": "exertion_pain",
    "bulto_o_hinchazón_visible": "visible_lump",
    "bulto_en_ingle": "visible_lump",
    "coloración_amarillenta_(ictericia)": "jaundice",
    "distensión_abdominal": "bloating",
    "náuseas": "nausea",
    "náuseas_o_vómitos": "nausea",
    "sensación_de_pesadez": "heaviness",
    "fiebre_reciente": "fever",
    "fiebre_leve": "fever",
}

SEVERITY_ALIASES: Dict[str, str] = {
    "leve": "mild",
    "moderada": "moderate",
    "severa": "severe",
}

DURATION_ALIASES: Dict[str, str] = {
    "menos_1_mes": "less_than_1_month",
    "menos_2_semanas": "less_than_1_month",
    "2_4_semanas": "less_than_1_month",
    "1_3_meses": "1_3_months",
    "1_6_meses": "1_3_months",
    "3_6_meses": "3_6_months",
    "6_12_meses": "6_12_months",
    "mas_6_meses": "6_12_months",
    "mas_1_anio": "more_than_1_year",
}

LIMITATION_ALIASES: Dict[str, str] = {
    "ninguna": "none",
    "leve": "mild",
    "un_poco": "mild",
    "moderada": "moderate",
    "moderadamente": "moderate",
    "severa": "severe",
    "mucho": "severe",
}

TIMEFRAME_ALIASES: Dict[str, str] = {
    "urgente": "urgent",
    "proximo_mes": "30_days",
    "2_3_meses": "90_days",
    "sin_prisa": "no_rush",
}

INSURANCE_ALIASES: Dict[str, str] = {
    "ninguno": "none",
    "privado": "private",
    "otro_seguro": "other",
    "otro": "other",
}

CONCERN_ALIASES: Dict[str, str] = {
    "preocupacioncostototal": "total_cost",
    "costo_total": "total_cost",
    "preocupacionmanejodolor": "pain_management",
    "manejo_dolor": "pain_management",
    "preocupacionriesgoscomplicaciones": "complications",
    "riesgos_complicaciones": "complications",
    "preocupacionanestesia": "anesthesia",
    "anestesia": "anesthesia",
    "preocupaciontiemporecuperacion": "recovery_time",
    "tiempo_recuperacion": "recovery_time",
    "tiempo_de_recuperación": "recovery_time",
    "tiempo_de_recuperacion": "recovery_time",
    "preocupacionfaltartrabajo": "missing_work",
    "ausencia_laboral": "missing_work",
    "faltar_trabajo": "missing_work",
    "preocupacionnoapoyocasa": "no_home_support",
    "no_apoyo_casa": "no_home_support",
    "preocupacionnoseguromejoropcion": "unsure_necessity",
    "no_seguro_mejor_opcion": "unsure_necessity",
    "dudas_sobre_necesidad": "unsure_necessity",
    "miedo_procedimiento": "procedure_fear",
    "miedo_al_procedimiento": "procedure_fear",
    # Labels used by the questionnaire form
    "el_costo_total_del_procedimiento_y_tratamiento": "total_cost",
    "los_riesgos_y_posibles_complicaciones": "complications",
    "complicaciones_postoperatorias": "complications",
    "la_anestesia_y_sus_efectos_secundarios": "anesthesia",
    "dolor_postoperatorio": "pain_management",
    "recuperación_prolongada": "recovery_time",
    "falta_de_apoyo_familiar": "no_home_support",
    "dudas_sobre_necesidad_real": "unsure_necessity",
}

COMORBIDITY_ALIASES: Dict[str, str] = {
    "presión_alta_(hipertensión)": "hypertension",
    "hipertension": "hypertension",
    "hipertensión": "hypertension",
    "diabetes_(azúcar_alta_en_la_sangre)": "diabetes",
    "obesidad_o_sobrepeso_importante": "obesity",
    "obesidad": "obesity",
    "problemas_del_corazón_(infartos,_arritmias,_etc.)": "heart_disease",
    "problemas_pulmonares_(asma,_epoc,_bronquitis_crónica)": "lung_disease",
    "enfermedades_de_la_tiroides": "thyroid_disease",
}

# Important-factor answers that cite positive recommendations from others.
POSITIVE_RECOMMENDATION_FACTORS: Tuple[str, ...] = (
    "positive_recommendations",
    "recomendaciones_positivas",
)


# =============================================================================
# STAGE 3: RISK INDEX WEIGHTS
# =============================================================================

RISK_WEIGHTS: Dict[str, int] = {
    "age_over_65": 10,
    "age_over_50": 5,
    "severity_severe": 15,
    "severity_moderate": 8,
    "pain_high": 12,  # pain >= 8
    "pain_moderate": 6,  # pain 5-7
    "limitation_severe": 15,
    "limitation_moderate": 8,
    "duration_over_1_year": 10,
    "duration_6_12_months": 7,
    "duration_3_6_months": 5,
    "comorbidities_many": 8,  # more than 2
    "comorbidities_some": 4,  # 1 or 2
    "symptom_jaundice": 10,
    "symptom_fever": 8,
    "timeframe_urgent": 10,
}


# =============================================================================
# STAGE 4: DIAGNOSIS GROUPING
# =============================================================================

DEFAULT_DIAGNOSIS_CATEGORIES: Tuple[str, ...] = (
    "Hernia Inguinal",
    "Hernia Umbilical",
    "Hernia Incisional",
    "Vesícula",
    "Otro",
)

DEFAULT_FALLBACK_CATEGORY = "Otro"

# Searched in order; first category with a matching keyword wins.
DEFAULT_DIAGNOSIS_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "Hernia Inguinal": ("inguinal",),
    "Hernia Umbilical": ("umbilical",),
    "Hernia Incisional": ("incisional",),
    "Vesícula": ("vesícula", "vesicula", "biliar"),
}


# =============================================================================
# STAGE 5: ICON REFERENCES
# =============================================================================

ICONS: Dict[str, str] = {
    "alert": "alert-circle",
    "activity": "activity",
    "heart": "heart",
    "shield": "shield",
    "stethoscope": "stethoscope",
    "dollar": "dollar-sign",
    "lightbulb": "lightbulb",
    "zap": "zap",
    "calendar": "calendar",
    "message": "message-circle",
    "file": "file-text",
    "clock": "clock",
    "users": "users",
    "award": "award",
    "check": "check-square",
    "help": "help-circle",
}


# =============================================================================
# STAGE 6: SENTIMENT LEXICON
# =============================================================================

SENTIMENT_POSITIVE_KEYWORDS: Tuple[str, ...] = (
    "alivio", "mejor", "esperanza", "confianza", "seguro", "optimista",
    "excelente", "bueno", "recomendado", "profesional", "calidad", "eficaz",
    "rápido", "satisfecho", "contento", "feliz", "agradecido", "tranquilo",
    "favorable", "positivo", "éxito", "recuperación", "solución", "mejoría",
    "progreso", "avance", "beneficio",
)

SENTIMENT_NEGATIVE_KEYWORDS: Tuple[str, ...] = (
    "miedo", "dolor", "preocupación", "ansiedad", "duda", "riesgo",
    "complicación", "problema", "difícil", "costoso", "caro", "peligroso",
    "inseguro", "malo", "terrible", "horrible", "insatisfecho", "desconfianza",
    "negativo", "fracaso", "error", "muerte", "incapacidad", "invalidez",
    "sufrimiento", "trauma",
)

SENTIMENT_MEDICAL_KEYWORDS: Tuple[str, ...] = (
    "cirugía", "operación", "médico", "doctor", "hospital", "clínica",
    "tratamiento", "recuperación", "anestesia", "medicamento", "diagnóstico",
    "síntoma", "herida", "cicatriz", "infección", "sangrado", "dolor",
    "inflamación", "fiebre",
)

CONCERN_PHRASES: Dict[str, str] = {
    "miedo": "Fear of the procedure",
    "dolor": "Worried about pain",
    "riesgo": "Uneasy about risks",
    "complicación": "Afraid of complications",
    "costoso": "Worried about cost",
    "caro": "Worried about cost",
}

POSITIVE_FACTOR_PHRASES: Dict[str, str] = {
    "alivio": "Wants relief",
    "confianza": "Trusts the procedure",
    "esperanza": "Hopes to improve",
    "solución": "Looking for a definitive solution",
}

PERSUASIVE_APPROACHES: Dict[str, str] = {
    "high": "Emphasize benefits and positive outcomes, offer a tentative date",
    "medium": "Address specific concerns, share more information and testimonials",
    "low": "Educational approach, dispel fears, offer alternatives and time to decide",
}


# =============================================================================
# STAGE 7: MESSAGES
# =============================================================================

INSUFFICIENT_DATA_MESSAGE = "Not enough data to generate insights."

NO_SURVEY_DATA_REPORT = "No survey data available to generate a report."

SURVEY_SCHEMA_VERSION = 1
