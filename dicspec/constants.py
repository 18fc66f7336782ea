"""Physical constants and empirical regression coefficients for DICSpec."""

CARBON_MOLAR_MASS_G_MOL = 12.01
MG_C_L_TO_UM = 1000 / CARBON_MOLAR_MASS_G_MOL  # mg C/L -> umol C/L
KELVIN_OFFSET = 273.15
KPA_TO_ATM = 0.00986923

# Reference atmospheric CO2 mixing ratio used for percent saturation.
ATMOSPHERIC_CO2_PPM = 410.0

# log10(K) = a / T + b + c * T, T in Kelvin.
# CO2 + H2O <=> HCO3- + H+ ; Harned & Davis, 1943
K1_COEFFS = (-3404.71, 14.8435, -0.032786)
# HCO3- <=> CO3-- + H+ ; Harned & Scholes Jr, 1941
K2_COEFFS = (-2902.39, 6.498, -0.02379)
# Henry's law solubility of CO2, -log10(K0) = a / T + b + c * T ;
# Harned & Davis, 1943 (as used in Venkiteswaran et al., PLOS ONE)
K0_COEFFS = (-2385.73, 14.0184, -0.0152642)

# H2O <=> H+ + OH- ; Kw = exp(a + b / T + c * log10(T))
KW_COEFFS = (148.9802, -13847.26, -23.6521)

OUTPUT_COLUMNS = (
    "calc_CO2_uM",
    "calc_HCO3_uM",
    "calc_CO3_uM",
    "calc_carb_alk_uM",
    "calc_pCO2_uatm",
    "calc_pCO2_perc_sat",
)

INPUT_FIELDS = ("dic_mg_per_l", "ph", "temp_c", "pressure_kpa")
