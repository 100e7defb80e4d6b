class DeckError(Exception):
    pass


class DeckNotFoundError(DeckError):
    pass


class CardNotFoundError(DeckError):
    pass


class DeckAccessError(DeckError):
    pass
