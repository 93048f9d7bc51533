# setup.py
from setuptools import find_namespace_packages, setup

setup(
    name="structure-manager",
    version="0.1.0",
    description="Verify and repair the expected layout of well-known application directories",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["structure_manager*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'structure-manager=structure_manager.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
