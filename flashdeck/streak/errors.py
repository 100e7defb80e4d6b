class StreakError(Exception):
    pass


class StreakValueError(StreakError):
    pass


class InvalidPastStreakError(StreakError):
    pass


class GallerySelectionError(StreakError):
    pass


class GalleryClosedError(StreakError):
    pass
