import os

from setuptools import setup, find_packages


def read_version():
    version_file = os.path.join(os.path.dirname(__file__),
                                "src", "sigsubtract", "__init__.py")
    with open(version_file) as fp:
        for line in fp:
            if line.startswith("VERSION"):
                return line.split("=")[1].strip().strip("'\"")
    raise LookupError("VERSION not found in sigsubtract/__init__.py")


setup(
  name="sigsubtract",
  version=read_version(),
  description="Remove the hashes of one MinHash sketch from many signatures",
  python_requires=">=3.8",
  package_dir={"": "src"},
  packages=find_packages(where="src"),
  install_requires=[
    "ijson>=3.1",
    "numpy",
  ],
  extras_require={
    "test": [
      "pytest>=6",
      "hypothesis",
    ],
  },
  entry_points={
    "console_scripts": [
      "sigsubtract = sigsubtract.__main__:main",
    ],
  },
)
