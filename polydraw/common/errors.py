"""Error handling policy helpers.

Interactive guards never raise; they return early and leave state untouched.
API misuse and structural validation failures raise ``PolyDrawError``.
"""

from loguru import logger


class PolyDrawError(RuntimeError):
    """Raised on API misuse or invalid input at the editor boundary."""


def raise_with_remedy(msg: str, remedy: str) -> None:
    """Raise a PolyDrawError with an actionable remediation message.

    Parameters
    ----------
    msg : str
        Primary error description
    remedy : str
        Concrete steps to fix the issue
    """
    full_msg = f"{msg}\n\nRemediation: {remedy}"
    raise PolyDrawError(full_msg)


def warn_soft_degrade(component: str, issue: str, fallback: str) -> None:
    """Log a warning for optional component failures with soft degradation.

    Parameters
    ----------
    component : str
        Name of the optional component
    issue : str
        Description of what failed
    fallback : str
        What behavior will occur instead
    """
    logger.warning(
        "Optional component '{}' issue: {}. Fallback: {}",
        component,
        issue,
        fallback,
    )
