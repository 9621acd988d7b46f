import time
import random
import string


def create_id_with_prefix(prefix: str, k: int = 6) -> str:
    # timestamp + k random chars; collections are generated in tight loops
    stamp = int(time.time() * 1000)
    rand = ''.join(random.choices(string.ascii_lowercase + string.digits, k=k))
    return f"{prefix}_{stamp}_{rand}"
