from core.models import ConductorMaterial, InsulationRating, Standard
from standards.tables import build_table, tables_by_material

T60, T75, T90 = InsulationRating.TEMP_60, InsulationRating.TEMP_75, InsulationRating.TEMP_90

# Ordered conductor sizes, smallest first (AWG then kcmil)
NEC_SIZES = ("14", "12", "10", "8", "6", "4", "3", "2", "1",
             "1/0", "2/0", "3/0", "4/0",
             "250", "300", "350", "400", "500", "600", "750", "1000")

AMPACITY_REFERENCE = "NEC Table 310.15(B)(16)"
RESISTANCE_REFERENCE = "NEC Chapter 9 Table 8"

# NEC Table 310.15(B)(16) - Allowable ampacities, not more than 3 current-carrying
# conductors, 30C ambient. Resistance is NEC Chapter 9 Table 8, ohms per 1000 ft.
# Format: (Size, R, 60C, 75C, 90C)
NEC_310_16_COPPER = build_table(
    Standard.NEC, ConductorMaterial.COPPER, (T60, T75, T90),
    [
        ("14", 3.14, 15, 20, 25),
        ("12", 1.98, 20, 25, 30),
        ("10", 1.24, 30, 35, 40),
        ("8", 0.778, 40, 50, 55),
        ("6", 0.491, 55, 65, 75),
        ("4", 0.308, 70, 85, 95),
        ("3", 0.245, 85, 100, 115),
        ("2", 0.194, 95, 115, 130),
        ("1", 0.154, 110, 130, 145),
        ("1/0", 0.122, 125, 150, 170),
        ("2/0", 0.0967, 145, 175, 195),
        ("3/0", 0.0766, 165, 200, 225),
        ("4/0", 0.0608, 195, 230, 260),
        ("250", 0.0515, 215, 255, 290),
        ("300", 0.0429, 240, 285, 320),
        ("350", 0.0367, 260, 310, 350),
        ("400", 0.0321, 280, 335, 380),
        ("500", 0.0258, 320, 380, 430),
        ("600", 0.0214, 350, 420, 475),
        ("750", 0.0171, 400, 475, 535),
        ("1000", 0.0129, 455, 545, 615),
    ],
    resistance_unit="ohm/kft", reference=AMPACITY_REFERENCE, size_order=NEC_SIZES,
)

# Aluminum is not tabulated below 12 AWG
NEC_310_16_ALUMINUM = build_table(
    Standard.NEC, ConductorMaterial.ALUMINUM, (T60, T75, T90),
    [
        ("12", 3.25, 15, 20, 25),
        ("10", 2.04, 25, 30, 35),
        ("8", 1.28, 35, 40, 45),
        ("6", 0.808, 40, 50, 55),
        ("4", 0.508, 55, 65, 75),
        ("3", 0.403, 65, 75, 85),
        ("2", 0.319, 75, 90, 100),
        ("1", 0.253, 85, 100, 115),
        ("1/0", 0.201, 100, 120, 135),
        ("2/0", 0.159, 115, 135, 150),
        ("3/0", 0.126, 130, 155, 175),
        ("4/0", 0.100, 150, 180, 205),
        ("250", 0.0847, 170, 205, 230),
        ("300", 0.0707, 190, 230, 255),
        ("350", 0.0605, 210, 250, 280),
        ("400", 0.0529, 225, 270, 305),
        ("500", 0.0424, 260, 310, 350),
        ("600", 0.0353, 285, 340, 385),
        ("750", 0.0282, 320, 385, 435),
        ("1000", 0.0212, 375, 445, 500),
    ],
    resistance_unit="ohm/kft", reference=AMPACITY_REFERENCE, size_order=NEC_SIZES,
)

NEC_TABLES = tables_by_material(NEC_310_16_COPPER, NEC_310_16_ALUMINUM)

# NEC Table 310.15(B)(1) - Ambient Temperature Correction Factors, 30C base.
# Format: (Upper_Limit_C, {Insulation_Rating: Factor}). 0.0 = not rated.
NEC_TEMP_MIN_C = -40.0
TEMP_CORRECTION_FACTORS = (
    (30, {T60: 1.00, T75: 1.00, T90: 1.00}),
    (35, {T60: 0.91, T75: 0.94, T90: 0.96}),
    (40, {T60: 0.82, T75: 0.88, T90: 0.91}),
    (45, {T60: 0.71, T75: 0.82, T90: 0.87}),
    (50, {T60: 0.58, T75: 0.75, T90: 0.82}),
    (55, {T60: 0.41, T75: 0.67, T90: 0.76}),
    (60, {T60: 0.00, T75: 0.58, T90: 0.71}),
    (65, {T60: 0.00, T75: 0.47, T90: 0.65}),
    (70, {T60: 0.00, T75: 0.33, T90: 0.58}),
    (75, {T60: 0.00, T75: 0.00, T90: 0.50}),
    (80, {T60: 0.00, T75: 0.00, T90: 0.41}),
    (85, {T60: 0.00, T75: 0.00, T90: 0.29}),
    (90, {T60: 0.00, T75: 0.00, T90: 0.00}),
)
NEC_TEMP_MAX_C = float(TEMP_CORRECTION_FACTORS[-1][0])

# NEC Table 310.15(C)(1) - Adjustment Factors for More Than Three
# Current-Carrying Conductors. Format: (Max_Conductors, Factor)
GROUPING_FACTORS = (
    (3, 1.0),
    (6, 0.80),   # 4-6 conductors
    (9, 0.70),   # 7-9
    (20, 0.50),  # 10-20
    (30, 0.45),  # 21-30
    (40, 0.40),  # 31-40
)

# Only used when the caller opts in; 41+ is outside the base table
GROUPING_FACTORS_EXTENDED = GROUPING_FACTORS + ((float("inf"), 0.35),)

# NEC Table 250.122 - Minimum equipment grounding conductor size.
# Format: (Max_OCPD_Amps, Copper, Aluminum)
NEC_250_122 = (
    (15, "14", "12"),
    (20, "12", "10"),
    (60, "10", "8"),
    (100, "8", "6"),
    (200, "6", "4"),
    (300, "4", "2"),
    (400, "3", "1"),
    (500, "2", "1/0"),
    (600, "1", "2/0"),
    (800, "1/0", "3/0"),
    (1000, "2/0", "4/0"),
    (1200, "3/0", "250"),
    (1600, "4/0", "350"),
    (2000, "250", "400"),
    (2500, "350", "600"),
    (3000, "400", "600"),
    (4000, "500", "750"),
    (5000, "700", "1200"),
    (6000, "800", "1200"),
)
