from setuptools import setup, find_packages

install_requires = []

with open('requirements.txt') as f:
    for line in f.readlines():
        req = line.strip()
        if not req or req.startswith('#') or '://' in req:
            continue
        install_requires.append(req)

setup(
    name="eye_finder",
    python_requires='>=3.10',
    version="0.1",
    packages=find_packages(exclude=["tests", "tests.*"]),  # Automatically includes all folders with __init__.py
    install_requires=install_requires,
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "eye-finder=eye_finder.core:main",
        ],
    },
)
