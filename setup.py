from setuptools import setup, find_packages

setup(
    name="dentry",
    version="1.0.0",
    description="XDG desktop entry parser with locale-aware key lookup",
    license="GPLv3",
    packages=find_packages(include=["dentry", "dentry.*"]),
    python_requires=">=3.11",
    install_requires=[],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "dentry=dentry.main:main",
        ],
    },
)
