from setuptools import setup, find_namespace_packages

setup(
    name="library_catalog_bot",
    version="0.1.0",
    packages=find_namespace_packages(include=['cli*', 'catalog*', 'api*']),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "Click",
        "SQLAlchemy>=2.0",
        "pydantic>=2",
        "fastapi",
        "uvicorn",
    ],
    extras_require={
        "postgres": [
            "psycopg2-binary",
        ],
        "test": [
            "pytest",
            "httpx",
        ],
    },
    entry_points={
        "console_scripts": [
            "catalog-bot=cli.main:main",
        ],
    },
)
