def levenshtein(a: str, b: str) -> int:
    """Insert/delete/substitute edit distance, two-row dynamic programming."""
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)
    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        cur = [i]
        for j, cb in enumerate(b, start=1):
            cur.append(min(
                prev[j] + 1,               # deletion
                cur[j - 1] + 1,            # insertion
                prev[j - 1] + (ca != cb),  # substitution
            ))
        prev = cur
    return prev[-1]


def common_prefix_length(a: str, b: str) -> int:
    n = 0
    for ca, cb in zip(a, b):
        if ca != cb:
            break
        n += 1
    return n


def are_minor_variants(a: str, b: str) -> bool:
    """
    Case-only changes, a naive trailing-s plural, or a one-character
    containment (e.g. "a"/"an") are never worth reporting.
    """
    la, lb = a.lower(), b.lower()
    if la == lb:
        return True
    if la + "s" == lb or la == lb + "s":
        return True
    if abs(len(a) - len(b)) <= 1 and (a in b or b in a):
        return True
    return False
