import time

def now() -> int:
    """Horodatage epoch (secondes) utilisé par tout le moteur."""
    return int(time.time())
