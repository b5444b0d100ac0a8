from .cache import CacheableMetadata

ALLOWED = "allowed"
NEUTRAL = "neutral"
FORBIDDEN = "forbidden"


class AccessResult(CacheableMetadata):
    """
    The outcome of an access check.

    Neutral means nobody granted access, only allowed results let the caller
    proceed. The result carries the cacheability of everything that was looked
    at to reach it, so output depending on the decision can vary correctly.
    """

    def __init__(self, state, reason=None):
        super(AccessResult, self).__init__()
        self.state = state
        self.reason = reason

    def __repr__(self):
        return f"<AccessResult {self.state} reason={self.reason!r}>"

    @classmethod
    def allowed(cls):
        return cls(ALLOWED)

    @classmethod
    def neutral(cls, reason=None):
        return cls(NEUTRAL, reason)

    @classmethod
    def forbidden(cls, reason=None):
        return cls(FORBIDDEN, reason)

    @classmethod
    def allowed_if(cls, condition):
        if condition:
            return cls.allowed()
        return cls.neutral()

    @classmethod
    def forbidden_if(cls, condition, reason=None):
        if condition:
            return cls.forbidden(reason)
        return cls.neutral()

    @classmethod
    def allowed_if_has_permission(cls, user, permission):
        if user.has_perm(permission):
            access = cls.allowed()
        else:
            access = cls.neutral(f"The '{permission}' permission is required.")

        return access.cache_per_permissions()

    def is_allowed(self):
        return self.state == ALLOWED

    def is_neutral(self):
        return self.state == NEUTRAL

    def is_forbidden(self):
        return self.state == FORBIDDEN

    def get_reason(self):
        return self.reason

    def set_reason(self, reason):
        self.reason = reason
        return self

    def and_if(self, other):
        """
        Combine with another result, both have to allow for the combination to
        allow. The other result's cacheability is only inherited when it
        influenced the outcome.
        """
        merge_other = False
        if self.is_forbidden() or other.is_forbidden():
            result = AccessResult.forbidden()
            if not self.is_forbidden():
                merge_other = True
                result.set_reason(other.get_reason())
            else:
                result.set_reason(self.get_reason())
        elif self.is_allowed() and other.is_allowed():
            result = AccessResult.allowed()
            merge_other = True
        else:
            result = AccessResult.neutral()
            if not self.is_neutral():
                merge_other = True
                result.set_reason(other.get_reason())
            else:
                result.set_reason(self.get_reason())

        result.inherit_cacheability(self)
        if merge_other:
            result.inherit_cacheability(other)

        return result

    def or_if(self, other):
        """
        Combine with another result, forbidden wins over allowed which wins
        over neutral. An allowed result only inherits the other
        result's cacheability when it is not cacheable itself.
        """
        merge_other = True
        if self.is_forbidden() or other.is_forbidden():
            result = AccessResult.forbidden()
            if self.is_forbidden():
                merge_other = False
                result.set_reason(self.get_reason())
            else:
                result.set_reason(other.get_reason())
        elif self.is_allowed() or other.is_allowed():
            result = AccessResult.allowed()
            merge_other = not self.is_allowed() or self.get_cache_max_age() == 0
        else:
            result = AccessResult.neutral(self.get_reason() or other.get_reason())

        result.inherit_cacheability(self)
        if merge_other:
            result.inherit_cacheability(other)

        return result
