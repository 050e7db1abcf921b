"""Mixed cart workload scenario.

Combines the cart journeys with weights that model storefront traffic. This
is the recommended scenario for load baseline testing.
"""

from locust import HttpUser, between

from loadtests.scenarios.carts import (
    CustomerCheckoutPrepJourney,
    GuestBrowseJourney,
    SignInMergeJourney,
)


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload simulating concurrent shoppers.

    - Guest browsing (60%): most traffic is anonymous
    - Sign-in with merge (25%): guests converting to customers
    - Signed-in customers (15%): returning shoppers checking totals
    """

    wait_time = between(0.5, 3.0)
    tasks = {
        GuestBrowseJourney: 12,
        SignInMergeJourney: 5,
        CustomerCheckoutPrepJourney: 3,
    }
