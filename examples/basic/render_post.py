"""Render a blog post the way the site filter does, with a fixed seed."""

import random

from krimdown import KrimdownFilter

POST = '''# Logging with Mongrel2

Handlers talk to Mongrel2 over ZeroMQ:

```ruby
puts "hello from a handler"
```
'''

krimdown = KrimdownFilter(rng=random.Random(2012))
print(krimdown.run(POST, {"plugins": ["footnotes"]}))
