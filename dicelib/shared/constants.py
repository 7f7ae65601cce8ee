"""
Library constants.
"""

# Die sizes
MIN_STANDARD_SIZE = 2  # Smallest die built from a face count
MIN_ROLLABLE_SIZE = 1

# Advantage / disadvantage
DEFAULT_ADVANTAGE_ROLLS = 2

# Delimited text grammar: "f1,f2,...:w1,w2,..."
VALUE_SEPARATOR = ","
SECTION_SEPARATOR = ":"
MAX_SECTIONS = 2

# Structured record fields
FACES_FIELD = "faces"
WEIGHTS_FIELD = "weights"
SEED_FIELD = "seed"
