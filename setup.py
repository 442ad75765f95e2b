import setuptools

setuptools.setup(
    name="nipalspy",
    version="0.1.0",
    description="NIPALS Principal Component Analysis and Partial Least "
    "Squares regression",
    packages=setuptools.find_packages(exclude=["*.tests"]),
    install_requires=[
        "numpy",
        "scipy",
        "pandas",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "nipalspy=nipalspy.__main__:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
)
