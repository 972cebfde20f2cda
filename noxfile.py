"""Nox automation for optsim development tasks."""

import nox

# Default sessions to run
nox.options.sessions = ["lint", "test"]


@nox.session(python=["3.11", "3.12", "3.13"])
def test(session: nox.Session) -> None:
    """Run the test suite with coverage."""
    session.install("-e", ".[test]")
    session.run(
        "pytest",
        "--cov=optsim",
        "--cov-report=term-missing",
        "--cov-fail-under=80",
        "-q",
        *session.posargs,
    )


@nox.session(python="3.11")
def lint(session: nox.Session) -> None:
    """Run linting with ruff and black."""
    session.install("ruff", "black")
    session.run("ruff", "check", ".")
    session.run("black", "--check", ".")


@nox.session(python="3.11")
def typecheck(session: nox.Session) -> None:
    """Run type checking with mypy."""
    session.install("mypy", "pandas-stubs")
    session.install("-e", ".")
    session.run("mypy", "optsim")


@nox.session(python=False)
def smoke(session: nox.Session) -> None:
    """Run the non-interactive CLI commands once without a virtualenv."""
    session.run("python", "-m", "optsim.cli.sim", "simulate", "--ticks", "5", "--seed", "7")
    session.run(
        "python",
        "-m",
        "optsim.cli.sim",
        "payoff",
        "--market-price",
        "90",
        "--trade",
        "Put,100,4,2024-12-31,2",
        "--trade",
        "Call,100,5,2024-12-31,1",
    )
    session.log("Smoke test passed!")


@nox.session(python=False)
def clean(session: nox.Session) -> None:
    """Clean up generated files and caches."""
    import shutil
    from pathlib import Path

    paths_to_remove = [
        ".pytest_cache",
        ".mypy_cache",
        ".ruff_cache",
        ".coverage",
        "htmlcov",
        ".nox",
        "dist",
        "build",
        "*.egg-info",
    ]

    for pattern in paths_to_remove:
        for path in Path(".").glob(pattern):
            session.log(f"Removing {path}")
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()
