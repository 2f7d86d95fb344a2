# 📄 File: plantgenius/shared/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# Connections to the outside world: the PlantGenius backend and the device's storage.
# 🧪 Purpose (Technical Summary):
# Shared infrastructure package (REST store client, local key-value storage).
