"""Request-routing proxy in front of the YOLO / RetinaNet detection backends."""

__version__ = "1.0.0"
