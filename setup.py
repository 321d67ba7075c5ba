"""Setup configuration for the Q&A Forum package."""

from setuptools import setup, find_namespace_packages

setup(
    name="qa-forum",
    version="1.0.0",
    description="Anonymous Q&A forum with tag, keyword and resolved-state search",
    author="",
    author_email="",
    packages=find_namespace_packages(include=["api*", "app*", "config*", "src*", "scripts*"]),
    python_requires=">=3.11",
    install_requires=[
        "duckdb>=1.0.0",
        "pandas>=2.1.0",
        "streamlit>=1.40.0",
        "httpx>=0.26.0",
        "python-dotenv>=1.0.0",
        "tqdm>=4.66.0",
        "fastapi>=0.110.0",
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
        "uvicorn>=0.27.0",
    ],
    extras_require={
        "dev": [
            "pytest>=8.0.0",
            "pytest-cov>=4.1.0",
            "black>=24.1.0",
            "ruff>=0.2.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "qa-forum-init-db=scripts.init_db:main",
            "qa-forum-import=scripts.import_questions:main",
        ],
    },
)
