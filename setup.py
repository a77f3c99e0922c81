from setuptools import setup, find_packages

setup(
    name="otpkit",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "cryptography>=3.4",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "otpkit=otpkit.client.cli:main",
        ],
    },
    python_requires=">=3.8",
    description="RFC 4648 Base32 codec and RFC 4226/6238 one-time code engine"
)
