MOVEMENT_IN = "IN"
MOVEMENT_OUT = "OUT"
MOVEMENT_TYPES = (MOVEMENT_IN, MOVEMENT_OUT)

API_PREFIX = "/api/v1"

TOKEN_TYPE = "bearer"
