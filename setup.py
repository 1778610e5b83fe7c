from setuptools import setup, find_packages

setup(
    name="lca-sim",
    version="0.1.0",
    packages=find_packages(include=["lca", "lca.*"]),
    py_modules=["run_simulation"],
    install_requires=[
        "numpy",
        "pandas",
        "scipy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "lca-run=run_simulation:main",
        ],
    },
    license="MIT",
)
