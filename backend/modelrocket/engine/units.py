import math

M_PER_CM = 0.01
CM_PER_M = 1.0 / M_PER_CM
M_PER_MM = 0.001
MM_PER_M = 1.0 / M_PER_MM
KG_PER_G = 0.001
G_PER_KG = 1.0 / KG_PER_G
M3_PER_CM3 = 1e-6
CM3_PER_M3 = 1.0 / M3_PER_CM3


def cm_to_m(value: float) -> float:
    return value * M_PER_CM


def m_to_cm(value: float) -> float:
    return value * CM_PER_M


def mm_to_m(value: float) -> float:
    return value * M_PER_MM


def m_to_mm(value: float) -> float:
    return value * MM_PER_M


def g_to_kg(value: float) -> float:
    return value * KG_PER_G


def kg_to_g(value: float) -> float:
    return value * G_PER_KG


def cm3_to_m3(value: float) -> float:
    return value * M3_PER_CM3


def m3_to_cm3(value: float) -> float:
    return value * CM3_PER_M3


def deg_to_rad(value: float) -> float:
    return math.radians(value)


def rad_to_deg(value: float) -> float:
    return math.degrees(value)


def convert_display_payload(value):
    """Convert a display-unit payload (cm, g) to SI, keyed by suffix.

    Keys ending in ``_cm`` become ``_m`` and keys ending in ``_g`` become
    ``_kg``; nested dicts and lists are converted recursively.
    """
    if isinstance(value, dict):
        out = {}
        for key, item in value.items():
            if isinstance(item, (dict, list)):
                item = convert_display_payload(item)
            if isinstance(item, (int, float)) and not isinstance(item, bool):
                if key.endswith("_cm"):
                    out[f"{key[:-3]}_m"] = cm_to_m(float(item))
                    continue
                if key.endswith("_g"):
                    out[f"{key[:-2]}_kg"] = g_to_kg(float(item))
                    continue
            out[key] = item
        return out
    if isinstance(value, list):
        return [convert_display_payload(item) for item in value]
    return value
