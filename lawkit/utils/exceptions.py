class LawkitError(Exception):
    """Base Exception Class"""
    pass
class UnknownSubcommand(LawkitError):
    """Error for an operation name the dispatcher does not know"""
    pass
class NoValidNumbers(LawkitError):
    """Error for when the extractor finds no usable numeric value in the input"""
    pass
class InsufficientData(LawkitError):
    """Error for a sample below a law's statistical floor"""
    pass
class InvalidParameter(LawkitError):
    """Option or generation parameter outside of its valid range"""
    pass
