"""Group management: groups, members, response filters and group commands."""