from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship
from jobly.core.database import Base


class Company(Base):
    """
    Company that posts jobs. Identified by a human-chosen handle.
    """
    __tablename__ = "companies"

    handle = Column(String(25), primary_key=True)
    name = Column(Text, unique=True, nullable=False)
    num_employees = Column(Integer, nullable=True)
    description = Column(Text, nullable=False)
    logo_url = Column(Text, nullable=True)

    # Read-only view of the jobs; deletes go through SQL and never cascade from here
    jobs = relationship("Job", order_by="Job.id", viewonly=True)

    def __repr__(self):
        return f"<Company(handle='{self.handle}', name='{self.name}')>"
