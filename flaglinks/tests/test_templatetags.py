from django.contrib.auth.models import Group
from django.template import Context, Template
from django.test import TestCase

from ..testutils import create_flag, create_user, grant_flag_access, make_request


class FlagLinkTagTestCase(TestCase):
    template = Template("{% load flag_tags %}{% flag_link flag entity %}")

    def setUp(self):
        self.flag = create_flag()
        self.group = Group.objects.create(name="editors")

    def render(self, user, flag=None):
        request = make_request(user=user)
        return self.template.render(
            Context(
                {"request": request, "flag": flag or self.flag, "entity": self.group}
            )
        )

    def test_no_access_renders_nothing(self):
        self.assertEqual(self.render(create_user()), "")

    def test_renders_link(self):
        user = grant_flag_access(create_user(), self.flag)
        html = self.render(user)

        self.assertIn('class="flag flag-bookmark action-flag"', html)
        self.assertIn("/flags/reload/bookmark/flag/", html)
        self.assertIn(">Bookmark this</a>", html)

    def test_flag_by_id(self):
        user = grant_flag_access(create_user(), self.flag)

        self.assertIn(">Bookmark this</a>", self.render(user, flag="bookmark"))
