from setuptools import setup
from pathlib import Path

this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

setup(
    name="hidrelay",
    version="1.0.0",
    description="Host-side controller for a serial JSON-RPC keyboard/mouse HID relay",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=["hidrelay", "hidrelay.device", "hidrelay.keyboard", "hidrelay.mouse"],
    install_requires=[
        "pyserial",
        "pyautogui",
        "Pillow",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
)
