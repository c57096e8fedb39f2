from setuptools import setup, find_packages
import os
import re

with open(os.path.join(os.path.dirname(__file__), "policysearch", "_version.py")) as file:
    for line in file:
        m = re.fullmatch("__version__ = '([^']+)'\n", line)
        if m:
            version = m.group(1)

setup(name="policysearch",
      version=version,
      description="Exhaustive search for shallow, reward-maximizing policy trees",
      license="MIT",
      python_requires=">=3.9",
      packages=find_packages(include=["policysearch", "policysearch.*"]),
      install_requires=["numpy",
                        "scipy",
                        "scikit-learn>=1.0",
                        "joblib",
                        "pandas"],
      extras_require={"test": ["pytest"]},
      zip_safe=False)
