# Flask configuration classes
