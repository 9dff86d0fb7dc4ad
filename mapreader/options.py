"""Settings for loading a MAP file."""


class Options:
    def __init__(
            self,
            name_apply: bool = True,
            replace: bool = False,
            ea64: bool = True,
    ):
        # Apply symbols as names (True) or as comments (False), unless a
        # DeDe prefix says otherwise
        self.name_apply = name_apply  # type: bool

        # Overwrite names or comments that are already present
        self.replace = replace  # type: bool

        # 64-bit address space: 16 hex digit addresses
        self.ea64 = ea64  # type: bool

    def __repr__(self):
        return "Options(name_apply=%s, replace=%s, ea64=%s)" % (
            self.name_apply, self.replace, self.ea64)
