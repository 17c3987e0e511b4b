# setup.py
from setuptools import setup, find_packages

setup(
    name="zipscope",
    version="1.0.0",
    description="Browse the folder tree of a zip archive without extracting it",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_packages(where="src"),  # Picks up src/zipscope and its subpackages
    python_requires=">=3.8",
    install_requires=[
        "requests",  # Opening archives from http(s) URLs
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'zipscope=zipscope.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
