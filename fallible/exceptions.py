class ForwardReturned(Exception):
    """
    Raised when the block given to `get_or_forward` returns instead of raising.
    """

    pass
