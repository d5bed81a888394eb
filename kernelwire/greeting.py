"""Console greeting."""


def greet(who: str) -> None:
    """Print a greeting naming the calling module."""
    print(f"Hola desde {who}!!")