from setuptools import setup, find_namespace_packages

setup(
    name="book_catalog",
    version="0.1.0",
    packages=find_namespace_packages(include=['cli*', 'core*', 'api*']),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "Click",
        "SQLAlchemy>=2.0",
        "pydantic>=2",
        "fastapi",
        "uvicorn",
        "httpx",
        "requests",
        "Pillow",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "catalog=cli.main:main",
        ],
    },
)
