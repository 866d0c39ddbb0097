"""Presets and constants for the Nelder-Mead simplex optimizer."""


# ============= Goals =============
MINIMIZE = "minimize"
MAXIMIZE = "maximize"
GOALS = (MINIMIZE, MAXIMIZE)


# ============= Simplex Coefficients =============
# ALPHA: reflection of the worst vertex through the centroid of the others.
# GAMMA: expansion along the reflected direction when reflection beats the best.
# RHO: contraction of the worst vertex towards the centroid.
# SIGMA: shrink of every vertex towards the best one.
ALPHA = 1.0
GAMMA = 2.0
RHO = 0.5
SIGMA = 0.5

# Per-axis displacement used to build the initial simplex from the guess.
INITIAL_STEP = 1.0


# ============= Stopping Criteria =============
REL_TOL = 1e-10
ABS_TOL = 1e-30
MAX_EVALUATIONS = 10000


# ============= Presets =============

# Smoke test: loose tolerances and a small budget.
QUICK = {
    'rel_tol': 1e-6,
    'abs_tol': 1e-12,
    'max_evaluations': 500,
}

# Settings of the paraboloid, line and circle demonstration runs.
DEFAULT = {
    'rel_tol': REL_TOL,
    'abs_tol': ABS_TOL,
    'max_evaluations': MAX_EVALUATIONS,
}

# Deep run: stop only once the simplex stops moving entirely.
PRECISE = {
    'rel_tol': 1e-14,
    'abs_tol': 0.0,
    'max_evaluations': 50000,
}

PRESETS = {
    'QUICK': QUICK,
    'DEFAULT': DEFAULT,
    'PRECISE': PRECISE,
}


# Progress printing frequency (iterations) when verbose output is enabled.
LOG_EVERY = 50
