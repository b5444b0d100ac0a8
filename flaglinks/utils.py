import copy
from collections.abc import Mapping


def merge_deep(*mappings):
    """
    Merge mappings recursively into a new dict.

    Later mappings win on conflicting keys at every nesting level, values that
    are not mappings (lists included) are replaced as a whole.
    None of the arguments are modified and the result shares no mutable
    values with them.
    """
    result = {}
    for mapping in mappings:
        for key, value in mapping.items():
            existing = result.get(key)
            if isinstance(value, Mapping):
                if isinstance(existing, Mapping):
                    result[key] = merge_deep(existing, value)
                else:
                    result[key] = merge_deep(value)
            else:
                result[key] = copy.deepcopy(value)

    return result
