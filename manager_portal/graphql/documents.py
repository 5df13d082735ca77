"""GraphQL documents used by the portal.

One constant per query or mutation. Field selections mirror what the pages
render; nothing here is generated.
"""

# =============================================================================
# Authentication
# =============================================================================

AUTHENTICATE_USER = """
mutation AuthenticateUser($email: String!, $password: String!) {
  authenticateUserWithPassword(email: $email, password: $password) {
    __typename
    ... on UserAuthenticationWithPasswordSuccess {
      item {
        id
        email
        name
        role
      }
    }
    ... on UserAuthenticationWithPasswordFailure {
      message
    }
  }
}
"""

# =============================================================================
# Account
# =============================================================================

USER_ACCOUNT = """
query UserAccount($where: UserWhereUniqueInput!) {
  user(where: $where) {
    id
    name
    email
  }
}
"""

UPDATE_USER = """
mutation UpdateUser($id: ID!, $data: UserUpdateInput!) {
  updateUser(where: { id: $id }, data: $data) {
    id
    name
    email
  }
}
"""

UPDATE_USER_PASSWORD = """
mutation UpdateUserPassword($id: ID!, $currentPassword: String!, $newPassword: String!) {
  updateUserPassword(id: $id, currentPassword: $currentPassword, newPassword: $newPassword) {
    id
  }
}
"""

# =============================================================================
# Business
# =============================================================================

USER_BUSINESSES = """
query UserBusinesses($where: UserWhereUniqueInput!) {
  user(where: $where) {
    businesses {
      id
      name
      description
      industry
      contactEmail
      contactPhone
      website
      location
      address
      yearFounded
      typeOfEntity
      businessHours
      revenue
      employeeCount
      keywords
      companyLinkedIn
      companyFacebook
      companyTwitter
      technologiesUsed
      sicCodes
    }
  }
}
"""

USER_BUSINESS_NAMES = """
query UserBusinessNames($where: UserWhereUniqueInput!) {
  user(where: $where) {
    businesses {
      id
      name
    }
  }
}
"""

UPDATE_BUSINESS = """
mutation UpdateBusiness($where: BusinessWhereUniqueInput!, $data: BusinessUpdateInput!) {
  updateBusiness(where: $where, data: $data) {
    id
    name
  }
}
"""

DASHBOARD_SUMMARY = """
query DashboardSummary($where: UserWhereUniqueInput!) {
  user(where: $where) {
    businesses {
      id
      name
      products {
        id
      }
      jobListings {
        id
      }
      reviews {
        id
        moderationStatus
      }
      complaints {
        id
        status
      }
    }
  }
}
"""

# =============================================================================
# Products
# =============================================================================

USER_PRODUCTS = """
query UserProducts($where: UserWhereUniqueInput!) {
  user(where: $where) {
    businesses {
      products {
        id
        name
        description
        images {
          id
          file {
            url
          }
        }
        reviews {
          id
          rating
        }
      }
    }
  }
}
"""

PRODUCT = """
query Product($where: ProductWhereUniqueInput!) {
  product(where: $where) {
    id
    name
    description
    business {
      id
    }
    images {
      id
      file {
        url
        filesize
        width
        height
        extension
      }
    }
    reviews {
      id
      user {
        name
        email
      }
      rating
      content
      moderationStatus
      createdAt
    }
    complaints {
      id
      user {
        name
        email
      }
      subject
      content
      status
      createdAt
    }
  }
}
"""

CREATE_PRODUCT = """
mutation CreateProduct($data: ProductCreateInput!) {
  createProduct(data: $data) {
    id
    name
  }
}
"""

UPDATE_PRODUCT = """
mutation UpdateProduct($id: ID!, $data: ProductUpdateInput!) {
  updateProduct(where: { id: $id }, data: $data) {
    id
    name
  }
}
"""

DELETE_PRODUCT = """
mutation DeleteProduct($where: ProductWhereUniqueInput!) {
  deleteProduct(where: $where) {
    id
  }
}
"""

# =============================================================================
# Images
# =============================================================================

CREATE_IMAGE = """
mutation CreateImage($file: Upload!, $productId: ID!) {
  createImage(data: { file: { upload: $file }, product: { connect: { id: $productId } } }) {
    id
    file {
      id
      url
    }
  }
}
"""

LINK_PRODUCT_IMAGE = """
mutation LinkProductImage($productId: ID!, $imageId: ID!) {
  updateProduct(
    where: { id: $productId }
    data: { images: { connect: { id: $imageId } } }
  ) {
    id
  }
}
"""

DELETE_IMAGE = """
mutation DeleteImage($imageId: ID!) {
  deleteImage(where: { id: $imageId }) {
    id
  }
}
"""

# =============================================================================
# Reviews
# =============================================================================

USER_REVIEWS = """
query UserReviews($where: UserWhereUniqueInput!) {
  user(where: $where) {
    businesses {
      reviews {
        id
        user {
          id
          name
        }
        isAnonymous
        rating
        moderationStatus
        createdAt
      }
    }
  }
}
"""

REVIEW = """
query Review($where: ReviewWhereUniqueInput!) {
  review(where: $where) {
    id
    user {
      name
    }
    rating
    content
    moderationStatus
    createdAt
    isAnonymous
    replies {
      id
      content
      createdAt
    }
  }
}
"""

UPDATE_REVIEW = """
mutation UpdateReview($where: ReviewWhereUniqueInput!, $data: ReviewUpdateInput!) {
  updateReview(where: $where, data: $data) {
    id
    moderationStatus
  }
}
"""

UPDATE_PRODUCT_REVIEW = """
mutation UpdateProductReview($where: ProductReviewWhereUniqueInput!, $data: ProductReviewUpdateInput!) {
  updateProductReview(where: $where, data: $data) {
    id
    moderationStatus
  }
}
"""

DELETE_REVIEW = """
mutation DeleteReview($where: ReviewWhereUniqueInput!) {
  deleteReview(where: $where) {
    id
  }
}
"""

CREATE_REVIEW_REPLY = """
mutation CreateReviewReply($data: ReviewReplyCreateInput!) {
  createReviewReply(data: $data) {
    id
    content
    createdAt
  }
}
"""

# =============================================================================
# Complaints
# =============================================================================

USER_COMPLAINTS = """
query UserComplaints($where: UserWhereUniqueInput!) {
  user(where: $where) {
    businesses {
      complaints {
        id
        user {
          id
          name
        }
        subject
        isAnonymous
        status
        createdAt
      }
    }
  }
}
"""

COMPLAINT = """
query Complaint($where: ComplaintWhereUniqueInput!) {
  complaint(where: $where) {
    id
    user {
      name
    }
    subject
    content
    status
    createdAt
    isAnonymous
    replies {
      id
      content
      createdAt
    }
  }
}
"""

UPDATE_COMPLAINT = """
mutation UpdateComplaint($where: ComplaintWhereUniqueInput!, $data: ComplaintUpdateInput!) {
  updateComplaint(where: $where, data: $data) {
    id
    status
  }
}
"""

UPDATE_PRODUCT_COMPLAINT = """
mutation UpdateProductComplaint($where: ProductComplaintWhereUniqueInput!, $data: ProductComplaintUpdateInput!) {
  updateProductComplaint(where: $where, data: $data) {
    id
    status
  }
}
"""

DELETE_COMPLAINT = """
mutation DeleteComplaint($where: ComplaintWhereUniqueInput!) {
  deleteComplaint(where: $where) {
    id
  }
}
"""

CREATE_COMPLAINT_REPLY = """
mutation CreateComplaintReply($data: ComplaintReplyCreateInput!) {
  createComplaintReply(data: $data) {
    id
    content
    createdAt
  }
}
"""

# =============================================================================
# Job Listings
# =============================================================================

USER_JOB_LISTINGS = """
query UserJobListings($where: UserWhereUniqueInput!) {
  user(where: $where) {
    businesses {
      jobListings {
        id
        title
        description
        location
        salary
        createdAt
      }
    }
  }
}
"""

UPDATE_JOB_LISTING = """
mutation UpdateJobListing($where: JobListingWhereUniqueInput!, $data: JobListingUpdateInput!) {
  updateJobListing(where: $where, data: $data) {
    id
    title
    salary
  }
}
"""

DELETE_JOB_LISTING = """
mutation DeleteJobListing($where: JobListingWhereUniqueInput!) {
  deleteJobListing(where: $where) {
    id
  }
}
"""
