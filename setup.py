from setuptools import setup, find_packages
setup(
    name="bloom-text-encoder",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"bloom_text_encoder": ["resources/*.txt"]},
    install_requires=["numpy", "zstandard", "xxhash", "mmh3"],
    extras_require={"test": ["pytest"]},
    python_requires=">=3.10",
)
