import logging

logger = logging.getLogger(__name__)

PERMANENT = -1


def merge_max_ages(a, b):
    if a == PERMANENT:
        return b
    if b == PERMANENT:
        return a

    return min(a, b)


def merge_attachments(a, b):
    """Merge two attachment mappings, lists are concatenated without duplicates"""
    result = {key: list(value) for key, value in a.items()}
    for key, values in b.items():
        target = result.setdefault(key, [])
        for value in values:
            if value not in target:
                target.append(value)

    return result


def is_cacheable_dependency(obj):
    return all(
        callable(getattr(obj, name, None))
        for name in ("get_cache_contexts", "get_cache_tags", "get_cache_max_age")
    )


class CacheableMetadata:
    """
    Cache contexts, tags and max-age describing what a piece of output varies
    by and when it goes stale.

    Contexts name request properties the output depends on (``user``,
    ``user.permissions``), tags name data it was built from
    (``flaglinks_flag:bookmark``) and max-age is a number of seconds with
    ``PERMANENT`` meaning forever.
    """

    def __init__(self, cache_contexts=None, cache_tags=None, cache_max_age=PERMANENT):
        self._cache_contexts = set(cache_contexts or [])
        self._cache_tags = set(cache_tags or [])
        self._cache_max_age = cache_max_age

    def __repr__(self):
        return (
            f"<{self.__class__.__name__} contexts={self.get_cache_contexts()!r} "
            f"tags={self.get_cache_tags()!r} max_age={self._cache_max_age!r}>"
        )

    def get_cache_contexts(self):
        return sorted(self._cache_contexts)

    def add_cache_contexts(self, cache_contexts):
        self._cache_contexts.update(cache_contexts)
        return self

    def set_cache_contexts(self, cache_contexts):
        self._cache_contexts = set(cache_contexts)
        return self

    def get_cache_tags(self):
        return sorted(self._cache_tags)

    def add_cache_tags(self, cache_tags):
        self._cache_tags.update(cache_tags)
        return self

    def set_cache_tags(self, cache_tags):
        self._cache_tags = set(cache_tags)
        return self

    def get_cache_max_age(self):
        return self._cache_max_age

    def set_cache_max_age(self, max_age):
        self._cache_max_age = max_age
        return self

    def merge_cache_max_age(self, max_age):
        self._cache_max_age = merge_max_ages(self._cache_max_age, max_age)
        return self

    def cache_per_user(self):
        return self.add_cache_contexts(["user"])

    def cache_per_permissions(self):
        return self.add_cache_contexts(["user.permissions"])

    def add_cacheable_dependency(self, dependency):
        """
        Make this metadata depend on another object.

        Objects that cannot describe their own cacheability make the result
        uncacheable.
        """
        if is_cacheable_dependency(dependency):
            self.add_cache_contexts(dependency.get_cache_contexts())
            self.add_cache_tags(dependency.get_cache_tags())
            self.merge_cache_max_age(dependency.get_cache_max_age())
        else:
            logger.debug(f"{dependency!r} is not a cacheable dependency, disabling cache")
            self.set_cache_max_age(0)

        return self

    def inherit_cacheability(self, other):
        return self.add_cacheable_dependency(other)

    def copy_cacheability(self):
        return CacheableMetadata(
            self._cache_contexts, self._cache_tags, self._cache_max_age
        )

    def merge(self, other):
        """Return new metadata combining this and the other metadata"""
        result = self.__class__.create_from_object(self)
        result.add_cacheable_dependency(other)
        return result

    def apply_to(self, fragment):
        fragment.cache = self.copy_cacheability()
        return fragment

    @classmethod
    def create_from_object(cls, obj):
        metadata = cls()
        if is_cacheable_dependency(obj):
            metadata.add_cacheable_dependency(obj)
        else:
            metadata.set_cache_max_age(0)

        return metadata

    @classmethod
    def create_from_render(cls, fragment):
        cache = getattr(fragment, "cache", None)
        if cache is None:
            return cls()

        return cls(
            cache.get_cache_contexts(),
            cache.get_cache_tags(),
            cache.get_cache_max_age(),
        )


class BubbleableMetadata(CacheableMetadata):
    """
    Cacheable metadata together with attachments, e.g. front-end libraries,
    that have to travel with the output wherever it ends up.
    """

    def __init__(self, *args, attachments=None, **kwargs):
        super(BubbleableMetadata, self).__init__(*args, **kwargs)
        self._attachments = merge_attachments({}, attachments or {})

    def get_attachments(self):
        return merge_attachments({}, self._attachments)

    def add_attachments(self, attachments):
        self._attachments = merge_attachments(self._attachments, attachments)
        return self

    def set_attachments(self, attachments):
        self._attachments = merge_attachments({}, attachments)
        return self

    def merge(self, other):
        result = super(BubbleableMetadata, self).merge(other)
        result.set_attachments(self._attachments)
        if isinstance(other, BubbleableMetadata):
            result.add_attachments(other.get_attachments())

        return result

    def apply_to(self, fragment):
        super(BubbleableMetadata, self).apply_to(fragment)
        fragment.attached = self.get_attachments()
        return fragment

    @classmethod
    def create_from_render(cls, fragment):
        metadata = super(BubbleableMetadata, cls).create_from_render(fragment)
        metadata.set_attachments(getattr(fragment, "attached", None) or {})
        return metadata
