from setuptools import setup, find_packages
import codecs
import os

here = os.path.abspath(os.path.dirname(__file__))

with codecs.open(os.path.join(here, "README.md"), encoding="utf-8") as fh:
    long_description = "\n" + fh.read()

VERSION = "0.1.0"
DESCRIPTION = "Scripted processing of seabird GPS-tracking logs: colony distance, foraging-trip extraction, speed and trip duration."

# Setting up
setup(
    name="seabird_trips",
    version=VERSION,
    author="Seabird tracking workshop",
    description=DESCRIPTION,
    long_description_content_type="text/markdown",
    long_description=long_description,
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=["pandas", "numpy", "numba"],
    extras_require={"test": ["pytest"]},
    keywords=["python", "gps", "seabird", "tracking", "trips"],
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
        "Operating System :: Unix",
        "Operating System :: MacOS :: MacOS X",
        "Operating System :: Microsoft :: Windows",
    ]
)
