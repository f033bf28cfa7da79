from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="nlsh",
    version="0.3.0",
    description="Convert natural language to shell commands using OpenAI or Gemini",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Environment :: Console",
        "Topic :: Utilities",
    ],
    python_requires=">=3.8",
    install_requires=[
        "requests>=2.25.0",
        "rich>=12.0.0",
        "toml>=0.10.2",
        "python-dotenv>=0.19.0",
    ],
    entry_points={
        "console_scripts": [
            "nlsh=nlsh.main:main",
        ],
    },
)
