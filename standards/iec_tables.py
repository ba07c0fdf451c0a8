from core.models import ConductorMaterial, InsulationRating, InstallationMethod, Standard
from standards.tables import build_table, tables_by_material

T60, T70, T90 = InsulationRating.TEMP_60, InsulationRating.TEMP_70, InsulationRating.TEMP_90

# Standard cross-sections in mm2, smallest first
IEC_SIZES = ("1.5", "2.5", "4", "6", "10", "16", "25", "35", "50", "70", "95",
             "120", "150", "185", "240", "300", "400", "500", "630")

AMPACITY_REFERENCE = "IEC 60364-5-52 Table B.52.4"
VOLTAGE_DROP_REFERENCE = "IEC 60364-5-52 Clause 525"

# IEC 60364-5-52 Table B.52.4 - Current-carrying capacity, reference method B1,
# 30C ambient. Resistance is the voltage-drop figure in mV/A/m.
# Format: (Size_mm2, mV/A/m, 60C, 70C PVC, 90C XLPE)
IEC_B52_4_COPPER = build_table(
    Standard.IEC, ConductorMaterial.COPPER, (T60, T70, T90),
    [
        ("1.5", 12.1, 14, 17.5, 22),
        ("2.5", 7.41, 19, 23, 30),
        ("4", 4.61, 25, 31, 40),
        ("6", 3.08, 32, 40, 51),
        ("10", 1.83, 44, 54, 70),
        ("16", 1.15, 59, 68, 94),
        ("25", 0.727, 77, 89, 119),
        ("35", 0.524, 96, 110, 148),
        ("50", 0.387, 117, 133, 180),
        ("70", 0.268, 149, 168, 232),
        ("95", 0.193, 180, 201, 282),
        ("120", 0.153, 208, 232, 328),
        ("150", 0.124, 236, 258, 374),
        ("185", 0.0991, 268, 289, 424),
        ("240", 0.0754, 315, 341, 500),
        ("300", 0.0601, 360, 384, 561),
        ("400", 0.0470, 410, 430, 656),
        ("500", 0.0366, 470, 490, 749),
        ("630", 0.0283, 540, 560, 855),
    ],
    resistance_unit="mV/A/m", reference=AMPACITY_REFERENCE, size_order=IEC_SIZES,
)

# Aluminum starts at 2.5 mm2 and stops at 500 mm2
IEC_B52_4_ALUMINUM = build_table(
    Standard.IEC, ConductorMaterial.ALUMINUM, (T60, T70, T90),
    [
        ("2.5", 12.1, 14.5, 18, 23),
        ("4", 7.54, 19.5, 24, 31),
        ("6", 5.03, 25, 31, 40),
        ("10", 3.00, 34, 42, 54),
        ("16", 1.88, 46, 53, 73),
        ("25", 1.19, 60, 69, 92),
        ("35", 0.858, 75, 86, 115),
        ("50", 0.633, 92, 104, 140),
        ("70", 0.439, 116, 131, 180),
        ("95", 0.316, 140, 157, 219),
        ("120", 0.250, 162, 181, 254),
        ("150", 0.203, 184, 201, 290),
        ("185", 0.162, 209, 225, 329),
        ("240", 0.123, 246, 266, 388),
        ("300", 0.0986, 281, 300, 435),
        ("400", 0.0770, 322, 335, 510),
        ("500", 0.0600, 368, 382, 582),
    ],
    resistance_unit="mV/A/m", reference=AMPACITY_REFERENCE, size_order=IEC_SIZES,
)

IEC_TABLES = tables_by_material(IEC_B52_4_COPPER, IEC_B52_4_ALUMINUM)

# IEC 60364-5-52 Table B.52.14 - Ambient temperature correction, 30C base.
# Format: (Upper_Limit_C, {Insulation_Rating: Factor}). 0.0 = not rated.
IEC_TEMP_MIN_C = 10.0
TEMP_CORRECTION_FACTORS = (
    (10, {T60: 1.22, T70: 1.22, T90: 1.15}),
    (15, {T60: 1.17, T70: 1.17, T90: 1.12}),
    (20, {T60: 1.12, T70: 1.12, T90: 1.08}),
    (25, {T60: 1.06, T70: 1.06, T90: 1.04}),
    (30, {T60: 1.00, T70: 1.00, T90: 1.00}),
    (35, {T60: 0.94, T70: 0.94, T90: 0.96}),
    (40, {T60: 0.87, T70: 0.87, T90: 0.91}),
    (45, {T60: 0.79, T70: 0.79, T90: 0.87}),
    (50, {T60: 0.71, T70: 0.71, T90: 0.82}),
    (55, {T60: 0.61, T70: 0.61, T90: 0.76}),
    (60, {T60: 0.50, T70: 0.50, T90: 0.71}),
    (65, {T60: 0.35, T70: 0.35, T90: 0.65}),
    (70, {T60: 0.00, T70: 0.00, T90: 0.58}),
    (75, {T60: 0.00, T70: 0.00, T90: 0.50}),
    (80, {T60: 0.00, T70: 0.00, T90: 0.41}),
)
IEC_TEMP_MAX_C = float(TEMP_CORRECTION_FACTORS[-1][0])

# IEC 60364-5-52 Table B.52.17 - Reduction factors for groups of circuits.
# Format: (Circuits, {Reference_Method: Factor}). Counts between rows use the
# next row up.
GROUPING_FACTORS = (
    (1, {"A": 1.00, "B": 1.00, "C": 1.00, "E": 1.00}),
    (2, {"A": 0.80, "B": 0.85, "C": 0.85, "E": 0.88}),
    (3, {"A": 0.70, "B": 0.79, "C": 0.79, "E": 0.82}),
    (4, {"A": 0.65, "B": 0.75, "C": 0.75, "E": 0.77}),
    (5, {"A": 0.60, "B": 0.73, "C": 0.73, "E": 0.75}),
    (6, {"A": 0.57, "B": 0.72, "C": 0.72, "E": 0.73}),
    (7, {"A": 0.54, "B": 0.70, "C": 0.70, "E": 0.73}),
    (8, {"A": 0.52, "B": 0.70, "C": 0.70, "E": 0.72}),
    (9, {"A": 0.50, "B": 0.70, "C": 0.70, "E": 0.72}),
    (12, {"A": 0.45, "B": 0.65, "C": 0.65, "E": 0.70}),
    (16, {"A": 0.41, "B": 0.60, "C": 0.60, "E": 0.68}),
    (20, {"A": 0.38, "B": 0.57, "C": 0.57, "E": 0.66}),
)

# Installation method -> reference method column of Table B.52.17
REFERENCE_METHOD = {
    InstallationMethod.SINGLE_CONDUIT: "A",
    InstallationMethod.MULTI_CONDUIT: "B",
    InstallationMethod.TRAY: "C",
    InstallationMethod.DIRECT_BURIED: "C",
    InstallationMethod.FREE_AIR: "E",
}

# IEC 60364-5-54 Table 54.2 - Protective conductor cross-section
PE_MIN_PROTECTED_MM2 = 2.5
