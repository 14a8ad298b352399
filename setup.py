from setuptools import setup
import re

VERSIONFILE = "todoapp/_version.py"
verstrline = open(VERSIONFILE, "rt").read()
VSRE = r"^__version__ = ['\"]([^'\"]*)['\"]"
mo = re.search(VSRE, verstrline, re.M)
if mo:
    verstr = mo.group(1)
else:
    raise RuntimeError(f"Unable to find version string in {VERSIONFILE}")
with open("README.md", "r") as fh:
    long_description = fh.read()


setup(
    name="todoapp",
    packages=[
        "todoapp",
        "todoapp.cli",
        "todoapp.rest",
        "todoapp.rest.routers",
    ],
    python_requires=">=3.8",
    install_requires=[
        "fastapi>=0.100",
        "pydantic>=2",
        "SQLAlchemy>=2.0",
        "uvicorn",
        "typer",
        "python-dotenv",
    ],
    extras_require={
        "postgres": ["psycopg2-binary"],
        "mysql": ["mysqlclient"],
        "test": ["pytest", "pytest-timeout", "httpx"],
    },
    entry_points={"console_scripts": ["todoapp=todoapp.cli.main:app"]},
    version=verstr,
    license="MIT",
    description="TODO and label management REST API",
    long_description=long_description,
    long_description_content_type="text/markdown",
    keywords=["todo", "REST", "FastAPI"],
)
