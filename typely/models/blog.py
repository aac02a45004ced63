"""
Blog and Contact Message Models
"""

from typely.extensions import db


BLOG_STATUS_PENDING = 'pending'
BLOG_STATUS_APPROVED = 'approved'


class Blog(db.Model):
    """A post owned by a single user"""
    __tablename__ = 'blogs'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'),
                        nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    content = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=BLOG_STATUS_PENDING,
                       server_default=BLOG_STATUS_PENDING)
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp(), index=True)

    @property
    def is_approved(self):
        return self.status == BLOG_STATUS_APPROVED

    def __repr__(self):
        return f'<Blog {self.id} {self.title!r}>'


class ContactMessage(db.Model):
    """Anonymous contact form submission"""
    __tablename__ = 'contact_messages'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    message = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp(), index=True)

    def __repr__(self):
        return f'<ContactMessage {self.email}>'
