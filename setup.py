from setuptools import find_packages, setup

setup(
    name="diagdist",
    version="0.1.0",
    description="Bottleneck and Wasserstein distances between persistence diagrams of critical point pairs",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "scipy",
        "numba",
        "pandas",
        "h5py",
        "pydantic>=2",
        "typing_extensions",
        "loguru",
        "rich",
    ],
    extras_require={"test": ["pytest"]},
)
