"""
Configuration for the worker-job matching system.
Adjust weights and parameters here.
"""

# Canonical weighted policy: multipliers applied to each raw component
WEIGHTS = {
    "skill": 3.0,
    "experience": 1.5,
    "availability": 2.0,
    "proximity": 2.0,
    "rating": 1.0,
}

# Percentage policy: points awarded for a full match on each factor
PERCENTAGE_WEIGHTS = {
    "skill_match_fraction": 40,
    "experience_factor": 25,
    "rating_fraction": 20,
    "verification": 10,
}

# Bonus policy: base score plus flat bonuses (one point value per satisfied rule)
BONUS_POINTS = {
    "base": 50,
    "trade_match": 30,
    "expert": 15,
    "intermediate": 10,
    "top_rating": 5,
    "availability": 5,
}

# Experience tiers for the bonus policy, by minimum years
EXPERIENCE_TIERS = {
    "expert": 8,
    "intermediate": 3,
}

BONUS_THRESHOLDS = {
    "top_rating": 4.5,
    "many_jobs": 50,
}

# Skill units awarded when a job lists no skills but the trade matches
TRADE_BASE_SCORE = 3

# Experience scoring parameters
EXPERIENCE_CAP_YEARS = 10
JOBS_COMPLETED_CAP = 10  # percentage policy saturates at this many jobs

# Availability scoring
AVAILABILITY_SCORES = {
    "immediate": 1.0,
    "flexible": 0.5,
    "dated_match": 1.0,
    "other": 0.0,
}

# Proximity scoring
MAX_DISTANCE_KM = 50.0
UNKNOWN_DISTANCE_SCORE = 0.5

# Rating scale
MAX_RATING = 5.0

# Ranking
DEFAULT_LIMIT = 10
DEFAULT_POLICY = "weighted"

# Reason thresholds
REASON_THRESHOLDS = {
    "experienced_jobs": 5,
    "top_rated": 4.0,
}
MAX_REASONS = 4
MAX_SKILLS_IN_REASON = 2

EARTH_RADIUS_KM = 6371.0
