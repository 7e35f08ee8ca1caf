from sqlalchemy import MetaData

# Shared by every table definition; Store.initialize() creates everything registered here.
metadata = MetaData()
