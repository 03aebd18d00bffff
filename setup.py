from setuptools import setup, find_namespace_packages

setup(
    name="library_circulation",
    version="0.1.0",
    packages=find_namespace_packages(include=['api*', 'cli*', 'core*']),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "Click",
        "SQLAlchemy>=2.0",
        "fastapi",
        "uvicorn",
        "alembic",
        "pydantic>=2",
        "python-dotenv",
        "Werkzeug",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",  # fastapi.testclient
        ],
        "postgres": [
            "psycopg2-binary",
        ],
    },
    entry_points={
        "console_scripts": [
            "library-circulation=cli.main:main",
        ],
    },
)
